from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from course_portal.database import get_db
from course_portal.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from course_portal.schemas.base import MessageResponse
from course_portal.services import auth_service

# Mounted without the token gate: login and register are the anonymous routes
router = APIRouter(prefix="/api/authentication", tags=["authentication"])


### ROUTE FOR LOGIN ###
@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
def login(login_request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login using username and password to get a bearer token.
    """
    token = auth_service.login(db, login_request.username, login_request.password)
    return {"token": token}


### ROUTE FOR REGISTRATION ###
@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def register(register_request: RegisterRequest, db: Session = Depends(get_db)):
    auth_service.register(
        db,
        name=register_request.name,
        username=register_request.username,
        password=register_request.password,
        email=register_request.email,
    )
    return {"message": "Student registered successfully"}
