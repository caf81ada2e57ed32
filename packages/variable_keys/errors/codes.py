"""Stable machine-readable error codes for variable-key failures."""

# Validation
INVALID_ARGUMENT = "INVALID_ARGUMENT"
NON_STRING_PRIMARY_KEY = "NON_STRING_PRIMARY_KEY"

# Not found
NOT_FOUND = "NOT_FOUND"
MODEL_NOT_REGISTERED = "MODEL_NOT_REGISTERED"

# Internal
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
