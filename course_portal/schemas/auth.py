from typing import Optional

from pydantic import ConfigDict

from course_portal.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Schema for login request"""
    # Missing fields are reported by the service as 400, not by pydantic
    username: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "jdoe",
                "password": "yourpassword"
            }
        }
    )


class RegisterRequest(CamelModel):
    """Schema for registration request"""
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Jane Doe",
                "username": "jdoe",
                "password": "yourpassword",
                "email": "jdoe@example.com"
            }
        }
    )


class TokenResponse(CamelModel):
    """Schema for login response"""
    token: str
