from typing import List, Optional

from pydantic import field_validator

from course_portal.schemas.base import CamelModel


class CourseBase(CamelModel):
    title: str
    description: Optional[str] = None

    @field_validator("title")
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v


class CourseCreate(CourseBase):
    pass


class CourseUpdate(CourseBase):
    id: int


class CourseInfo(CamelModel):
    id: int
    title: str
    description: Optional[str] = None


class EnrollmentOfCourse(CamelModel):
    id: int
    student_id: int
    course_id: int


class CourseResponse(CourseInfo):
    enrollments: List[EnrollmentOfCourse] = []
