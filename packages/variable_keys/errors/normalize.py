"""Exception normalization into structured ``ErrorDetail`` values."""

from __future__ import annotations

from . import codes
from .exceptions import CannotAssignNonStringKeyError, ModelNotRegisteredError
from .types import ErrorCategory, ErrorDetail

# First match wins, so library exceptions precede the builtins they subclass.
_RULES: tuple[tuple[type[Exception], ErrorCategory, str], ...] = (
    (ModelNotRegisteredError, ErrorCategory.NOT_FOUND, codes.MODEL_NOT_REGISTERED),
    (CannotAssignNonStringKeyError, ErrorCategory.VALIDATION, codes.NON_STRING_PRIMARY_KEY),
    (ValueError, ErrorCategory.VALIDATION, codes.INVALID_ARGUMENT),
    (TypeError, ErrorCategory.VALIDATION, codes.INVALID_ARGUMENT),
    (LookupError, ErrorCategory.NOT_FOUND, codes.NOT_FOUND),
)


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Normalize an exception into an ``ErrorDetail``.

    Metadata always names the exception type, plus the model and field for
    registry misses, or the key kind and offending value type for rejected
    keys. Anything unrecognized becomes an internal error.
    """
    metadata = {"exception_type": type(exc).__name__}
    if isinstance(exc, ModelNotRegisteredError):
        metadata["model"] = exc.model
        if exc.field is not None:
            metadata["field"] = exc.field
    elif isinstance(exc, CannotAssignNonStringKeyError):
        metadata["key_kind"] = exc.key_kind
        metadata["value_type"] = type(exc.value).__name__

    for exc_type, category, code in _RULES:
        if isinstance(exc, exc_type):
            return ErrorDetail(
                code=code, message=str(exc), category=category, metadata=metadata
            )
    return ErrorDetail(
        code=codes.UNEXPECTED_EXCEPTION,
        message=str(exc) or "unexpected exception",
        category=ErrorCategory.INTERNAL,
        metadata=metadata,
    )
