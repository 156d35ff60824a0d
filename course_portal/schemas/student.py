from typing import List, Optional

from pydantic import field_validator

from course_portal.schemas.base import CamelModel
from course_portal.schemas.course import CourseInfo


class CreateStudentRequest(CamelModel):
    name: Optional[str] = None
    username: str
    email: Optional[str] = None
    password: str

    @field_validator("username", "password")
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v


class UpdateStudentRequest(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    # Left out or empty keeps the stored hash
    password: Optional[str] = None


class StudentInfo(CamelModel):
    id: int
    name: Optional[str] = None
    username: str
    email: Optional[str] = None


class EnrollmentOfStudent(CamelModel):
    id: int
    student_id: int
    course_id: int
    course: Optional[CourseInfo] = None


class StudentResponse(StudentInfo):
    enrollments: List[EnrollmentOfStudent] = []
