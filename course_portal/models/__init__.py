from course_portal.database import Base

from .course import Course
from .enrollment import Enrollment
from .student import Student

# Import all models here
# This way when Base.metadata.create_all runs every table is registered
