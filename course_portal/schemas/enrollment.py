from typing import Optional

from course_portal.schemas.base import CamelModel
from course_portal.schemas.course import CourseInfo
from course_portal.schemas.student import StudentInfo


class EnrollmentCreate(CamelModel):
    student_id: int
    course_id: int


class EnrollmentUpdate(EnrollmentCreate):
    id: int


class EnrollmentResponse(CamelModel):
    id: int
    student_id: int
    course_id: int


class EnrollmentDetail(EnrollmentResponse):
    student: Optional[StudentInfo] = None
    course: Optional[CourseInfo] = None
