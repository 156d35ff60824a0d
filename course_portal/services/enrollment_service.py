"""
Rules that span the Student/Course/Enrollment graph.

Every mutation here runs as one transaction on the caller's session: the
existence checks, the duplicate check and the write are committed together.
The student and course rows are locked first (``SELECT ... FOR UPDATE``, or
the whole database on SQLite), and the ``_student_course_uc`` unique
constraint is the final guard, so two concurrent requests for the same pair
cannot both insert.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from course_portal.database import reserve_for_write
from course_portal.exceptions import BadRequest, InternalError, NotFound
from course_portal.models import Course, Enrollment, Student
from course_portal.utils import commit_or_500

logger = logging.getLogger(__name__)

ALREADY_ENROLLED = "Student is already enrolled in this course."
MISSING_ENDPOINT = "Student or Course not found."


def _lock_endpoints(
    db: Session, student_id: int, course_id: int
) -> Tuple[Optional[Student], Optional[Course]]:
    reserve_for_write(db)
    student = (
        db.query(Student).filter(Student.id == student_id).with_for_update().first()
    )
    course = db.query(Course).filter(Course.id == course_id).with_for_update().first()
    return student, course


def _pair_taken(db: Session, student_id: int, course_id: int, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Enrollment.id).filter(
        Enrollment.student_id == student_id, Enrollment.course_id == course_id
    )
    if exclude_id is not None:
        query = query.filter(Enrollment.id != exclude_id)
    return query.first() is not None


def _enrollment_exists(db: Session, enrollment_id: int) -> bool:
    return db.query(Enrollment.id).filter(Enrollment.id == enrollment_id).first() is not None


def _commit_enrollment(
    db: Session, student_id: int, course_id: int, action: str, enrollment_id: Optional[int] = None
) -> None:
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if enrollment_id is not None and not _enrollment_exists(db, enrollment_id):
            raise NotFound("Enrollment not found.")
        logger.exception("Concurrency error occurred while %s enrollment %s.", action, enrollment_id)
        raise InternalError()
    except IntegrityError:
        db.rollback()
        # Either a concurrent request won the race for the pair or an endpoint
        # vanished underneath us; report whichever is true now.
        if _pair_taken(db, student_id, course_id, exclude_id=enrollment_id):
            raise BadRequest(ALREADY_ENROLLED)
        raise BadRequest(MISSING_ENDPOINT)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("An error occurred while %s the enrollment.", action)
        raise InternalError()


def enroll(db: Session, student_id: int, course_id: int) -> Enrollment:
    student, course = _lock_endpoints(db, student_id, course_id)
    if student is None or course is None:
        db.rollback()
        raise BadRequest(MISSING_ENDPOINT)

    if _pair_taken(db, student_id, course_id):
        db.rollback()
        raise BadRequest(ALREADY_ENROLLED)

    enrollment = Enrollment(student_id=student_id, course_id=course_id)
    db.add(enrollment)
    _commit_enrollment(db, student_id, course_id, "creating")
    db.refresh(enrollment)

    logger.info("Enrolled student %s in course %s", student_id, course_id)
    return enrollment


def change_enrollment(db: Session, enrollment_id: int, student_id: int, course_id: int) -> Enrollment:
    student, course = _lock_endpoints(db, student_id, course_id)
    enrollment = db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()
    if enrollment is None:
        db.rollback()
        raise NotFound("Enrollment not found.")

    if student is None or course is None:
        db.rollback()
        raise BadRequest(MISSING_ENDPOINT)

    if _pair_taken(db, student_id, course_id, exclude_id=enrollment_id):
        db.rollback()
        raise BadRequest(ALREADY_ENROLLED)

    enrollment.student_id = student_id
    enrollment.course_id = course_id
    _commit_enrollment(db, student_id, course_id, "updating", enrollment_id)

    logger.info(
        "Enrollment %s now links student %s and course %s", enrollment_id, student_id, course_id
    )
    return enrollment


def unenroll(db: Session, enrollment_id: int) -> None:
    enrollment = db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()
    if enrollment is None:
        raise NotFound("Enrollment not found.")

    db.delete(enrollment)
    commit_or_500(db, f"An error occurred while deleting the enrollment with ID {enrollment_id}.")

    logger.info("Deleted enrollment %s", enrollment_id)


def list_courses_for_student(db: Session, student_id: int) -> List[Course]:
    if db.query(Student.id).filter(Student.id == student_id).first() is None:
        raise NotFound("Student not found.")

    return (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == student_id)
        .order_by(Enrollment.id)
        .all()
    )


def list_students_for_course(db: Session, course_id: int) -> List[Student]:
    if db.query(Course.id).filter(Course.id == course_id).first() is None:
        raise NotFound("Course not found.")

    return (
        db.query(Student)
        .join(Enrollment, Enrollment.student_id == Student.id)
        .filter(Enrollment.course_id == course_id)
        .order_by(Enrollment.id)
        .all()
    )
