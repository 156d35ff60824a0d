import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from starlette import status

from course_portal.database import get_db
from course_portal.exceptions import BadRequest, InternalError, NotFound
from course_portal.models import Course, Enrollment
from course_portal.schemas.course import CourseInfo
from course_portal.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentDetail,
    EnrollmentUpdate,
)
from course_portal.services import enrollment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


@router.get("", response_model=List[EnrollmentDetail])
def get_all_enrollments(db: Session = Depends(get_db)):
    try:
        return (
            db.query(Enrollment)
            .options(joinedload(Enrollment.student), joinedload(Enrollment.course))
            .order_by(Enrollment.id)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("An error occurred while retrieving enrollments.")
        raise InternalError()


@router.get("/available-courses", response_model=List[CourseInfo])
def get_available_courses(db: Session = Depends(get_db)):
    try:
        return db.query(Course).order_by(Course.id).all()
    except SQLAlchemyError:
        logger.exception("An error occurred while retrieving available courses.")
        raise InternalError()


@router.get("/students/{student_id}/courses", response_model=List[CourseInfo])
def get_courses_by_student(student_id: int, db: Session = Depends(get_db)):
    return enrollment_service.list_courses_for_student(db, student_id)


@router.get("/{enrollment_id}", response_model=EnrollmentDetail)
def get_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment = (
        db.query(Enrollment)
        .options(joinedload(Enrollment.student), joinedload(Enrollment.course))
        .filter(Enrollment.id == enrollment_id)
        .first()
    )
    if not enrollment:
        raise NotFound("Enrollment not found.")
    return enrollment


@router.post("", response_model=EnrollmentDetail, status_code=status.HTTP_201_CREATED)
def create_enrollment(
    enrollment_request: EnrollmentCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    enrollment = enrollment_service.enroll(
        db, enrollment_request.student_id, enrollment_request.course_id
    )
    response.headers["Location"] = str(
        request.url_for("get_enrollment", enrollment_id=enrollment.id)
    )
    return enrollment


@router.put("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_enrollment(
    enrollment_id: int,
    enrollment_request: EnrollmentUpdate,
    db: Session = Depends(get_db),
):
    if enrollment_request.id != enrollment_id:
        raise BadRequest("Enrollment ID mismatch.")

    enrollment_service.change_enrollment(
        db, enrollment_id, enrollment_request.student_id, enrollment_request.course_id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment_service.unenroll(db, enrollment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
