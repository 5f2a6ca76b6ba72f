from .department import Department
from .user import User
from .course import Course
