from fastapi import Depends

from course_portal.oauth2 import decode_access_token
from course_portal.security.json_bearer import BearerToken

bearer_scheme = BearerToken(
    scheme_name="Bearer",
    description="Paste the token returned by /api/authentication/login",
)


def verify_access_token(access_token: str = Depends(bearer_scheme)) -> dict:
    return decode_access_token(access_token)  # claims (username, student_id)
