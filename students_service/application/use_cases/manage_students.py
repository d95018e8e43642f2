from typing import Any

import structlog

from ...domain.entities import Student
from ...domain.errors import NotFoundError

logger = structlog.get_logger()


class IStudentRepository:
    def list(self, course: str | None = None) -> list[Student]: ...
    def get(self, student_id: str) -> Student | None: ...
    def create(self, fields: dict[str, Any]) -> Student: ...
    def update(self, student_id: str, fields: dict[str, Any]) -> Student | None: ...
    def delete(self, student_id: str) -> bool: ...


class StudentService:
    """CRUD над студентами. Поля приходят уже проверенными и нормализованными
    (StudentCreate/StudentUpdate); ошибки домена пробрасываются наверх, HTTP-слой
    превращает их в ответ."""

    def __init__(self, repo: IStudentRepository):
        self.repo = repo

    def list_students(self) -> list[Student]:
        return self.repo.list()

    def list_students_by_course(self, course: str) -> list[Student]:
        # курс сознательно не сверяется со списком COURSES: неизвестный курс = пустой список
        return self.repo.list(course=course)

    def get_student(self, student_id: str) -> Student:
        student = self.repo.get(student_id)
        if student is None:
            raise NotFoundError()
        return student

    def create_student(self, fields: dict[str, Any]) -> Student:
        student = self.repo.create(fields)
        logger.info("student_created", student_id=student.id)
        return student

    def update_student(self, student_id: str, changes: dict[str, Any]) -> Student:
        # сохранённая запись валидна и изменения валидны, значит валидна и их смесь
        student = self.repo.update(student_id, changes)
        if student is None:
            raise NotFoundError()
        logger.info("student_updated", student_id=student.id, fields=sorted(changes))
        return student

    def delete_student(self, student_id: str) -> None:
        if not self.repo.delete(student_id):
            raise NotFoundError()
        logger.info("student_deleted", student_id=student_id)
