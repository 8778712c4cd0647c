from .student import Student, StudentRole
from .company import Company, CompanyType
from .application import Application

__all__ = [
    "Student", "StudentRole",
    "Company", "CompanyType",
    "Application",
]
