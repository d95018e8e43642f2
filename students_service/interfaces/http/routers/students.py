from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ....application.use_cases.manage_students import StudentService
from ....infrastructure.db import get_db
from ....infrastructure.repositories import StudentRepository
from ..schemas import Envelope, StudentCreate, StudentUpdate, envelope

router = APIRouter(prefix="/api/students", tags=["students"])

def get_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(repo=StudentRepository(db))

@router.get("", response_model=Envelope, response_model_exclude_none=True)
def list_students(service: StudentService = Depends(get_service)):
    return envelope(service.list_students())

@router.post("", response_model=Envelope, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, service: StudentService = Depends(get_service)):
    student = service.create_student(payload.model_dump())
    return envelope(student, message="Student created successfully")

@router.get("/course/{course}", response_model=Envelope, response_model_exclude_none=True)
def list_students_by_course(course: str, service: StudentService = Depends(get_service)):
    return envelope(service.list_students_by_course(course))

@router.get("/{student_id}", response_model=Envelope, response_model_exclude_none=True)
def get_student(student_id: str, service: StudentService = Depends(get_service)):
    return envelope(service.get_student(student_id))

@router.put("/{student_id}", response_model=Envelope, response_model_exclude_none=True)
def update_student(student_id: str, payload: StudentUpdate,
                   service: StudentService = Depends(get_service)):
    student = service.update_student(student_id, payload.model_dump(exclude_unset=True))
    return envelope(student, message="Student updated successfully")

@router.delete("/{student_id}", response_model=Envelope, response_model_exclude_none=True)
def delete_student(student_id: str, service: StudentService = Depends(get_service)):
    service.delete_student(student_id)
    return envelope({}, message="Student deleted successfully")
