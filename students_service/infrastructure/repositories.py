import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .metrics import db_queries_total, db_query_duration_seconds
from .models import StudentORM, utcnow
from ..application.use_cases.manage_students import IStudentRepository
from ..domain.entities import Student
from ..domain.errors import ConflictError, MalformedIdentifierError, UnexpectedStoreError

logger = structlog.get_logger()


def _aware(value: datetime) -> datetime:
    # SQLite не хранит таймзону, все даты в базе пишутся в UTC
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def to_domain(s: StudentORM) -> Student:
    return Student(
        id=s.id,
        name=s.name,
        age=s.age,
        course=s.course,
        email=s.email,
        grade=s.grade,
        enrollment_date=_aware(s.enrollment_date),
        created_at=_aware(s.created_at),
        updated_at=_aware(s.updated_at),
    )


def parse_student_id(raw: str) -> str:
    """Приводит идентификатор к каноническому виду UUID или кидает MalformedIdentifierError."""
    try:
        return str(uuid.UUID(raw))
    except (TypeError, ValueError):
        raise MalformedIdentifierError()


class StudentRepository(IStudentRepository):
    def __init__(self, db: Session): self.db = db

    @contextmanager
    def _store(self, operation: str):
        db_queries_total.labels(operation=operation).inc()
        try:
            with db_query_duration_seconds.labels(operation=operation).time():
                yield
        except IntegrityError as e:
            self.db.rollback()
            # единственный уникальный индекс в таблице, кроме первичного ключа, это email
            if "email" in str(e.orig).lower():
                raise ConflictError()
            logger.error("store_integrity_error", operation=operation, error=str(e.orig))
            raise UnexpectedStoreError(str(e.orig))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("store_error", operation=operation, error=str(e))
            raise UnexpectedStoreError(str(e))

    def list(self, course: str | None = None) -> list[Student]:
        with self._store("list"):
            q = self.db.query(StudentORM)
            if course is not None:
                q = q.filter(StudentORM.course == course)
            rows = q.order_by(StudentORM.created_at.desc()).all()
        return [to_domain(r) for r in rows]

    def get(self, student_id: str) -> Student | None:
        student_id = parse_student_id(student_id)
        with self._store("get"):
            row = self.db.query(StudentORM).filter(StudentORM.id == student_id).first()
        return to_domain(row) if row else None

    def create(self, fields: dict[str, Any]) -> Student:
        with self._store("create"):
            row = StudentORM(**fields)
            self.db.add(row); self.db.commit(); self.db.refresh(row)
        return to_domain(row)

    def update(self, student_id: str, fields: dict[str, Any]) -> Student | None:
        student_id = parse_student_id(student_id)
        with self._store("update"):
            row = self.db.query(StudentORM).filter(StudentORM.id == student_id).first()
            if not row:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            # updated_at двигаем явно: onupdate не сработает, если поля не изменились
            row.updated_at = utcnow()
            self.db.commit(); self.db.refresh(row)
        return to_domain(row)

    def delete(self, student_id: str) -> bool:
        student_id = parse_student_id(student_id)
        with self._store("delete"):
            row = self.db.query(StudentORM).filter(StudentORM.id == student_id).first()
            if not row:
                return False
            self.db.delete(row); self.db.commit()
        return True
