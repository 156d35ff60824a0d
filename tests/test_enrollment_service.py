import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from course_portal.database import Base
from course_portal.exceptions import BadRequest, NotFound
from course_portal.models import Course, Enrollment, Student
from course_portal.services import enrollment_service


@pytest.fixture
def file_sessions(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'portal.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def seeded(file_sessions):
    db = file_sessions()
    student = Student(username="amy", password="not-a-real-hash")
    course = Course(title="Art")
    db.add_all([student, course])
    db.commit()
    ids = student.id, course.id
    db.close()
    return ids


def test_concurrent_enrolls_create_one_row(file_sessions, seeded):
    student_id, course_id = seeded
    barrier = threading.Barrier(4)

    def attempt():
        db = file_sessions()
        try:
            barrier.wait()
            enrollment_service.enroll(db, student_id, course_id)
            return "ok"
        except BadRequest as exc:
            return exc.detail
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: attempt(), range(4)))

    assert results.count("ok") == 1
    assert all(r == "Student is already enrolled in this course." for r in results if r != "ok")

    db = file_sessions()
    assert db.query(Enrollment).count() == 1
    db.close()


def test_unenroll_unknown_is_not_found(file_sessions):
    db = file_sessions()
    with pytest.raises(NotFound):
        enrollment_service.unenroll(db, 42)
    db.close()


def test_listing_unknown_endpoints_is_not_found(file_sessions):
    db = file_sessions()
    with pytest.raises(NotFound):
        enrollment_service.list_courses_for_student(db, 42)
    with pytest.raises(NotFound):
        enrollment_service.list_students_for_course(db, 42)
    db.close()


def test_courses_come_back_in_enrollment_order(file_sessions, seeded):
    student_id, first_course = seeded
    db = file_sessions()
    second_course = Course(title="Biology")
    db.add(second_course)
    db.commit()

    enrollment_service.enroll(db, student_id, second_course.id)
    enrollment_service.enroll(db, student_id, first_course)

    courses = enrollment_service.list_courses_for_student(db, student_id)
    assert [c.title for c in courses] == ["Biology", "Art"]
    students = enrollment_service.list_students_for_course(db, first_course)
    assert [s.username for s in students] == ["amy"]
    db.close()
