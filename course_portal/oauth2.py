import logging
from datetime import timezone, datetime, timedelta
from typing import Optional

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from course_portal.config import config
from course_portal.exceptions import InternalError, Unauthorized
from course_portal.models import Student

logger = logging.getLogger(__name__)

bcrypt_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return bcrypt_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt_context.verify(password, hashed_password)


def get_signing_key() -> str:
    if not config.JWT_KEY:
        logger.error("JWT key is missing or empty.")
        raise InternalError("Internal server error: Missing JWT key.")
    return config.JWT_KEY


### Check if student is in our DATABASE ###
def authenticate_student(username: str, password: str, db: Session) -> Student:
    student = db.query(Student).filter(Student.username == username).first()
    if student is None or not verify_password(password, student.password):
        logger.info("Rejected login for username %r", username)
        raise Unauthorized("Invalid credentials.")
    return student


### Create a JWT token for student ###
def create_access_token(
    username: str,
    student_id: int,
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    issued_at = issued_at or datetime.now(timezone.utc)
    encode = {
        "sub": username,
        "id": student_id,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(encode, get_signing_key(), algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the claims of a valid token, raising Unauthorized otherwise"""
    try:
        payload = jwt.decode(token, get_signing_key(), algorithms=[config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Access token expired")
    except jwt.JWTError:
        raise Unauthorized("Invalid access token")

    username: str = payload.get("sub")
    student_id = payload.get("id")
    if username is None or student_id is None:
        raise Unauthorized("Invalid access token")
    try:
        student_id = int(student_id)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid access token")
    return {"username": username, "student_id": student_id}
