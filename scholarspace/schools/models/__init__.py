from .school import School
from .form import Form
from .schoolclass import SchoolClass, StudentClassAssignment


__all__ = ["School", "Form", "SchoolClass", "StudentClassAssignment"]
