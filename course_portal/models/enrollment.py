import sqlalchemy
from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from course_portal.models.basemodel import BaseModel


class Enrollment(BaseModel):
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True
    )
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    student = relationship("Student", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")

    ### Preventing Duplicate Course Enrollment ###
    __table_args__ = (
        sqlalchemy.UniqueConstraint("student_id", "course_id", name="_student_course_uc"),
    )
