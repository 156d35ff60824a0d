"""
Registration and login for students.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from course_portal.exceptions import BadRequest, InternalError
from course_portal.models import Student
from course_portal.oauth2 import authenticate_student, create_access_token
from course_portal.services.student_service import create_student

logger = logging.getLogger(__name__)


def register(
    db: Session,
    name: Optional[str],
    username: Optional[str],
    password: Optional[str],
    email: Optional[str],
) -> Student:
    if not username or not password:
        raise BadRequest("Username and password are required.")

    student = create_student(db, username=username, password=password, name=name, email=email)
    logger.info("Registered student %r", student.username)
    return student


def login(db: Session, username: Optional[str], password: Optional[str]) -> str:
    if not username or not password:
        raise BadRequest("Username and password are required.")

    try:
        student = authenticate_student(username, password, db)
    except SQLAlchemyError:
        logger.exception("An error occurred during login.")
        raise InternalError("Internal server error occurred.")

    return create_access_token(student.username, student.id)
