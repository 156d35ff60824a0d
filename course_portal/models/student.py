from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from course_portal.models.basemodel import BaseModel
from course_portal.roles import UserRole


class Student(BaseModel):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        index=True,
        autoincrement=True,
    )
    name = Column(String, nullable=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)
    # bcrypt hash, never the plain password
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.STUDENT.value)

    enrollments = relationship(
        "Enrollment",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="Enrollment.id",
    )
