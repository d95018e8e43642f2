from typing import Any, Sequence

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...domain.errors import StudentServiceError, UnexpectedStoreError, ValidationError
from .schemas import AGE_MAX, AGE_MIN, NAME_MAX, NAME_MIN

logger = structlog.get_logger()

REQUIRED_MESSAGES = {
    "name": "Student name is required",
    "age": "Student age is required",
    "course": "Course is required",
    "email": "Email is required",
}


def _field_message(field: str, error: dict[str, Any]) -> str:
    kind = error["type"]
    value = error.get("input")
    if field in REQUIRED_MESSAGES and (
        kind == "missing" or value is None or (isinstance(value, str) and not value.strip())
    ):
        return REQUIRED_MESSAGES[field]
    if field == "name":
        if kind == "string_too_short":
            return f"Name must be at least {NAME_MIN} characters long"
        if kind == "string_too_long":
            return f"Name cannot exceed {NAME_MAX} characters"
        return "Name must be a string"
    if field == "age":
        if kind == "greater_than_equal":
            return f"Age must be at least {AGE_MIN}"
        if kind == "less_than_equal":
            return f"Age cannot exceed {AGE_MAX}"
        return "Age must be a number"
    if field == "course":
        return f"{value} is not a valid course"
    if field == "email":
        return "Please enter a valid email"
    if field == "grade":
        return f"{value} is not a valid grade"
    if field in ("enrollmentDate", "enrollment_date"):
        return "Enrollment date must be a valid date"
    return error["msg"]


def validation_messages(errors: Sequence[dict[str, Any]]) -> list[str]:
    """Переводит ошибки pydantic в сообщения для клиента: одно на поле, в порядке полей схемы."""
    messages: list[str] = []
    seen: set[str] = set()
    for error in errors:
        loc = [str(x) for x in error["loc"]]
        if loc and loc[0] == "body":
            loc = loc[1:]
        if error["type"] == "json_invalid":
            messages.append("Request body must be valid JSON")
            continue
        if not loc:
            # тело отсутствует или это не JSON-объект
            messages.append("Request body must be a JSON object")
            continue
        field = loc[0]
        if field in seen:
            continue
        seen.add(field)
        messages.append(_field_message(field, error))
    return messages


async def student_error_handler(request: Request, exc: StudentServiceError):
    content = {"success": False, "message": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    if isinstance(exc, UnexpectedStoreError):
        content["error"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return await student_error_handler(request, ValidationError(validation_messages(exc.errors())))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Route not found"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal Server Error", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StudentServiceError, student_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
