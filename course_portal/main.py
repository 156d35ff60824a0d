import logging
from logging.config import dictConfig

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from course_portal.config import LogConfig, config
from course_portal.controllers import auth, courses, enrollments, students
from course_portal.database import Base, engine
from course_portal.middlewares.cors import setup_cors
from course_portal.middlewares.verify_token import verify_access_token

dictConfig(LogConfig().model_dump())
logger = logging.getLogger("course_portal")

app = FastAPI(title="Course Enrollment Portal API", version="1.0.0")

setup_cors(app)

# Anonymous routes: login and register only
app.include_router(auth.router)

# Everything else sits behind the bearer token gate
for router in (courses.router, enrollments.router, students.router):
    app.include_router(router, dependencies=[Depends(verify_access_token)])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": errors},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )


@app.on_event("startup")
def startup_event():
    """Refuse to start without a signing key, then make sure the tables exist"""
    if not config.JWT_KEY:
        logger.critical("JWT key is not configured.")
        raise RuntimeError("JWT key is not configured.")

    Base.metadata.create_all(bind=engine)
    logger.info("Course portal started")
