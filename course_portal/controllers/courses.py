import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from starlette import status

from course_portal.database import get_db
from course_portal.exceptions import BadRequest, InternalError, NotFound
from course_portal.models import Course
from course_portal.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from course_portal.schemas.student import StudentInfo
from course_portal.services import enrollment_service
from course_portal.utils import commit_or_500, commit_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("", response_model=List[CourseResponse])
def get_all_courses(db: Session = Depends(get_db)):
    try:
        return (
            db.query(Course)
            .options(selectinload(Course.enrollments))
            .order_by(Course.id)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("An error occurred while retrieving courses.")
        raise InternalError()


@router.get("/{course_id}", response_model=CourseResponse)
def get_course_by_id(course_id: int, db: Session = Depends(get_db)):
    course = (
        db.query(Course)
        .options(selectinload(Course.enrollments))
        .filter(Course.id == course_id)
        .first()
    )
    if not course:
        raise NotFound("Course not found.")
    return course


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    create_course_request: CourseCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    course = Course(
        title=create_course_request.title,
        description=create_course_request.description,
    )
    db.add(course)
    commit_or_500(db, "An error occurred while creating the course.")
    db.refresh(course)

    response.headers["Location"] = str(request.url_for("get_course_by_id", course_id=course.id))
    return course


@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_course(
    course_id: int,
    update_course_request: CourseUpdate,
    db: Session = Depends(get_db),
):
    if update_course_request.id != course_id:
        raise BadRequest("Course ID mismatch.")

    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFound("Course not found.")

    course.title = update_course_request.title
    course.description = update_course_request.description
    commit_update(db, Course, course_id, "Course")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: int, db: Session = Depends(get_db)):
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFound("Course not found.")

    # Enrollments of the course go with it
    db.delete(course)
    commit_or_500(db, f"An error occurred while deleting the course with ID {course_id}.")
    logger.info("Deleted course %s", course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{course_id}/students", response_model=List[StudentInfo])
def get_course_students(course_id: int, db: Session = Depends(get_db)):
    """Get all students enrolled in a specific course"""
    return enrollment_service.list_students_for_course(db, course_id)
