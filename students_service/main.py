import time
import logging
import structlog
from fastapi import FastAPI, Request
from sqlalchemy import text

from .infrastructure.db import engine
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .interfaces.http.errors import register_exception_handlers
from .interfaces.http.routers import students as students_router
from .config import settings

# Настройка структурированного логирования
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
register_exception_handlers(app)

# Middleware для правильной кодировки, метрик и логов запросов
@app.middleware("http")
async def add_charset_header(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    response = await call_next(request)

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    # Метрики: для неизвестных маршрутов не плодим метку на каждый URL
    route = request.scope.get("route")
    endpoint = route.path if route is not None else "unmatched"
    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


@app.on_event("startup")
def on_startup():
    logger.info("Starting students service", version=settings.APP_VERSION)
    Base.metadata.create_all(bind=engine)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection established")


@app.get("/")
def root():
    return {
        "message": "Welcome to Student Management System API",
        "version": settings.APP_VERSION,
        "endpoints": {
            "GET /api/students": "Get all students",
            "POST /api/students": "Create new student",
            "GET /api/students/{id}": "Get student by ID",
            "PUT /api/students/{id}": "Update student",
            "DELETE /api/students/{id}": "Delete student",
            "GET /api/students/course/{course}": "Get students by course",
        },
        "exampleStudent": {
            "name": "John Doe",
            "age": 20,
            "course": "Computer Science",
            "email": "john.doe@example.com",
            "grade": "A",
        },
    }


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(students_router.router)
