import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from course_portal.exceptions import Conflict, InternalError
from course_portal.models import Student
from course_portal.oauth2 import hash_password
from course_portal.roles import UserRole

logger = logging.getLogger(__name__)


def check_if_username_taken(db: Session, username: str):
    existing = db.query(Student.id).filter(Student.username == username).first()
    if existing:
        raise Conflict("Username already exists.")


def create_student(
    db: Session,
    username: str,
    password: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> Student:
    """Persist a new student with a bcrypt hash of `password`.

    Two registrations racing for the same username both pass the lookup;
    the unique index then rejects the second insert, which is reported as
    a Conflict like the lookup would have been.
    """
    check_if_username_taken(db, username)

    student = Student(
        name=name,
        username=username,
        email=email,
        password=hash_password(password),
        role=UserRole.STUDENT.value,
    )
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username already exists.")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("An error occurred while adding the student.")
        raise InternalError("An error occurred while saving student data.")
    db.refresh(student)
    logger.info("Created student %s (%r)", student.id, student.username)
    return student


def apply_student_update(
    student: Student,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> None:
    """Overwrite name and email; re-hash the password only if a new one was sent"""
    student.name = name
    student.email = email
    if password:
        student.password = hash_password(password)
