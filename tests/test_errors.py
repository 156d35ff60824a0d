import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from course_portal.main import app
from course_portal.models import Course
from course_portal.services import enrollment_service

from conftest import TestingSessionLocal

original_commit = Session.commit


@pytest.fixture
def course_id(client, auth_headers):
    return client.post("/api/courses", json={"title": "Art"}, headers=auth_headers).json()["id"]


def test_update_of_concurrently_deleted_course_is_not_found(client, auth_headers, course_id, monkeypatch):
    def commit_after_concurrent_delete(self):
        other = TestingSessionLocal()
        other.query(Course).filter(Course.id == course_id).delete()
        original_commit(other)
        other.close()
        raise StaleDataError("UPDATE statement on table 'courses' expected to update 1 row(s); 0 were matched.")

    monkeypatch.setattr(Session, "commit", commit_after_concurrent_delete)
    response = client.put(
        f"/api/courses/{course_id}", json={"id": course_id, "title": "Music"}, headers=auth_headers
    )
    assert response.status_code == 404


def test_stale_update_of_existing_course_is_internal_error(client, auth_headers, course_id, monkeypatch):
    def stale_commit(self):
        raise StaleDataError("UPDATE statement on table 'courses' expected to update 1 row(s); 0 were matched.")

    monkeypatch.setattr(Session, "commit", stale_commit)
    response = client.put(
        f"/api/courses/{course_id}", json={"id": course_id, "title": "Music"}, headers=auth_headers
    )
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error."}


def test_failed_commit_hides_driver_message(client, auth_headers, monkeypatch):
    def broken_commit(self):
        raise OperationalError("INSERT INTO courses", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", broken_commit)
    response = client.post("/api/courses", json={"title": "Art"}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error."}
    assert "disk" not in response.text


def test_unexpected_error_becomes_generic_500(client, auth_headers, monkeypatch):
    def explode(db, student_id):
        raise RuntimeError("secret connection string leaked")

    monkeypatch.setattr(enrollment_service, "list_courses_for_student", explode)
    quiet_client = TestClient(app, raise_server_exceptions=False)
    response = quiet_client.get("/api/students/1/courses", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error."}
    assert "secret" not in response.text
