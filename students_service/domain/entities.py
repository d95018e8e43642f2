from dataclasses import dataclass
from datetime import datetime
from typing import Literal, get_args

Course = Literal[
    "Computer Science",
    "Mathematics",
    "Physics",
    "Chemistry",
    "Biology",
    "Engineering",
    "Business",
    "Arts",
]
Grade = Literal["A", "B", "C", "D", "F"]

COURSES = get_args(Course)
GRADES = get_args(Grade)
DEFAULT_GRADE = "C"

@dataclass(frozen=True)
class Student:
    id: str
    name: str
    age: int
    course: str
    email: str
    grade: str
    enrollment_date: datetime
    created_at: datetime
    updated_at: datetime
