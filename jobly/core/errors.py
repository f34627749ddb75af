"""
Domain errors for the data-access layer.

Every error carries the HTTP status it should surface as, so the exception
handlers can translate it without a lookup table. None of these are
retryable: they stem from malformed input or missing rows, not transient
failures.
"""

from typing import Any, Optional

from fastapi import status


class JoblyError(Exception):
    """Base class for all errors raised by builders and CRUD functions"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status_code}}


class BadRequestError(JoblyError):
    """Client supplied input that cannot be acted on"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(JoblyError):
    """Target row does not exist"""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidFilterError(BadRequestError):
    """Filter key is not in the whitelist for the entity kind"""

    def __init__(self, key: str, allowed):
        self.key = key
        self.allowed = tuple(allowed)
        super().__init__(
            f"{key} is not a valid filter field. "
            f"Please select filter of {_join_names(self.allowed)}."
        )


class InvalidFilterValueError(BadRequestError):
    """Filter value could not be coerced to the expected type"""

    def __init__(self, key: str, value: Any, expected: str):
        self.key = key
        self.value = value
        super().__init__(f"{key} must be {expected}, got {value!r}")


class InvalidRangeError(BadRequestError):
    """Lower bound of a min/max filter pair exceeds the upper bound"""

    def __init__(self, low_key: str, low: Any, high_key: str, high: Any):
        self.low_key = low_key
        self.high_key = high_key
        super().__init__(f"{low_key} ({low}) greater than {high_key} ({high})")


class NoFieldsError(BadRequestError):
    def __init__(self, message: str = "No data"):
        super().__init__(message)


class DuplicateError(BadRequestError):
    pass


class UnknownFieldError(BadRequestError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is not an updatable field")


class ImmutableFieldError(BadRequestError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Error: cannot change {field}")


class InvalidFieldValueError(BadRequestError):
    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")


def _join_names(names) -> str:
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])}, or {names[-1]}"
