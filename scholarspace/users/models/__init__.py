from .base_user import User  # Make User importable from users.models
from .parent import ParentStudentLink


__all__ = ["User", "ParentStudentLink"]
