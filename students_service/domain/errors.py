class StudentServiceError(Exception):
    """Базовая ошибка сервиса: знает свой HTTP-статус и текст для конверта."""
    status_code = 500
    message = "Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(StudentServiceError):
    status_code = 400
    message = "Validation Error"

    def __init__(self, errors: list[str]):
        super().__init__()
        self.errors = list(errors)


class NotFoundError(StudentServiceError):
    status_code = 404
    message = "Student not found"


class MalformedIdentifierError(StudentServiceError):
    status_code = 400
    message = "Invalid student ID"


class ConflictError(StudentServiceError):
    status_code = 400
    message = "Email already exists"


class UnexpectedStoreError(StudentServiceError):
    """Хранилище недоступно или упало. detail уходит клиенту в поле error."""
    status_code = 500
    message = "Server Error"

    def __init__(self, detail: str):
        super().__init__()
        self.detail = detail
