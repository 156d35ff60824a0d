"""
Student records plus the enroll/unenroll shortcuts used by the portal UI.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from starlette import status

from course_portal.database import get_db
from course_portal.exceptions import BadRequest, InternalError, NotFound
from course_portal.models import Course, Enrollment, Student
from course_portal.schemas.course import CourseInfo
from course_portal.schemas.enrollment import EnrollmentCreate, EnrollmentResponse
from course_portal.schemas.student import (
    CreateStudentRequest,
    StudentResponse,
    UpdateStudentRequest,
)
from course_portal.services import enrollment_service, student_service
from course_portal.utils import commit_or_500, commit_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


def _with_courses(query):
    return query.options(selectinload(Student.enrollments).joinedload(Enrollment.course))


@router.get("", response_model=List[StudentResponse])
def get_all_students(db: Session = Depends(get_db)):
    try:
        return _with_courses(db.query(Student)).order_by(Student.id).all()
    except SQLAlchemyError:
        logger.exception("An error occurred while retrieving students.")
        raise InternalError("Internal server error occurred.")


@router.get("/available-courses", response_model=List[CourseInfo])
def get_available_courses(db: Session = Depends(get_db)):
    try:
        return db.query(Course).order_by(Course.id).all()
    except SQLAlchemyError:
        logger.exception("An error occurred while retrieving available courses.")
        raise InternalError("Internal server error occurred.")


@router.post("/enroll", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    enrollment_request: EnrollmentCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    enrollment = enrollment_service.enroll(
        db, enrollment_request.student_id, enrollment_request.course_id
    )
    response.headers["Location"] = str(
        request.url_for("get_enrolled_courses", student_id=enrollment.student_id)
    )
    return enrollment


@router.delete("/unenroll/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def unenroll_from_course(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment_service.unenroll(db, enrollment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: int, db: Session = Depends(get_db)):
    student = _with_courses(db.query(Student)).filter(Student.id == student_id).first()
    if student is None:
        raise NotFound("Student not found.")
    return student


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    create_student_request: CreateStudentRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    student = student_service.create_student(
        db,
        username=create_student_request.username,
        password=create_student_request.password,
        name=create_student_request.name,
        email=create_student_request.email,
    )
    response.headers["Location"] = str(request.url_for("get_student", student_id=student.id))
    return student


@router.put("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_student(
    student_id: int,
    update_student_request: UpdateStudentRequest,
    db: Session = Depends(get_db),
):
    if update_student_request.id != student_id:
        raise BadRequest("Invalid student data.")

    student = db.query(Student).filter(Student.id == student_id).first()
    if student is None:
        raise NotFound("Student not found.")

    student_service.apply_student_update(
        student,
        name=update_student_request.name,
        email=update_student_request.email,
        password=update_student_request.password,
    )
    commit_update(db, Student, student_id, "Student")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = db.query(Student).filter(Student.id == student_id).first()
    if student is None:
        raise NotFound("Student not found.")

    # Enrollments of the student go with it
    db.delete(student)
    commit_or_500(db, f"An error occurred while deleting student with ID {student_id}.")
    logger.info("Deleted student %s", student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{student_id}/courses", response_model=List[CourseInfo])
def get_enrolled_courses(student_id: int, db: Session = Depends(get_db)):
    """Get all courses the student is enrolled in"""
    return enrollment_service.list_courses_for_student(db, student_id)
