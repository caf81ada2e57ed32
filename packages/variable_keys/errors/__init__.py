"""Public error API for variable keys."""

from . import codes
from .exceptions import (
    CannotAssignNonStringKeyError,
    CannotAssignNonStringToUlidError,
    CannotAssignNonStringToUuidError,
    ModelNotRegisteredError,
)
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "CannotAssignNonStringKeyError",
    "CannotAssignNonStringToUlidError",
    "CannotAssignNonStringToUuidError",
    "ErrorCategory",
    "ErrorDetail",
    "ModelNotRegisteredError",
    "codes",
    "exception_to_error",
]
