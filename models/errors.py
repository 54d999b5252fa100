"""
Booking domain errors.

Every error carries a machine-readable ``kind``, a human-readable message and
the HTTP status the API answers with. Routes let these propagate to the
blueprint error handler, which renders them with ``api_exception``.
"""


class BookingError(Exception):
    """Base class for all booking domain errors."""

    kind = 'BookingError'
    status = 400

    def __init__(self, message: str = None, **details):
        self.message = message or self.kind
        self.details = details
        super().__init__(self.message)

    def to_extra(self) -> dict:
        """Extra top-level fields for the JSON error envelope."""
        return dict(self.details)


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationError(BookingError, ValueError):
    """
    Input rejected at the boundary.

    A single ValidationError may carry several field errors, each one a dict
    ``{'kind', 'field', 'message'}``; the first one decides ``kind``.
    """

    kind = 'ValidationError'
    status = 400

    def __init__(self, message: str = None, field: str = None, errors: list = None, **details):
        super().__init__(message, **details)
        if errors is None:
            errors = [{'kind': self.kind, 'field': field, 'message': self.message}]
        self.errors = errors
        if errors:
            self.kind = errors[0]['kind']

    def to_extra(self) -> dict:
        extra = super().to_extra()
        extra['errors'] = self.errors
        return extra

    @classmethod
    def collect(cls, errors: list) -> 'ValidationError':
        """
        Build one error reporting every collected field error.
        The exception class matches the kind of the first error.
        """
        kinds = {sub.kind: sub for sub in cls.__subclasses__()}
        error_cls = kinds.get(errors[0]['kind'], cls)
        return error_cls(errors[0]['message'], errors=errors)

    @staticmethod
    def field_error(kind: str, field: str, message: str) -> dict:
        return {'kind': kind, 'field': field, 'message': message}


class InvalidDate(ValidationError):
    kind = 'InvalidDate'


class InvalidGroupSize(ValidationError):
    kind = 'InvalidGroupSize'


class InvalidCustomer(ValidationError):
    kind = 'InvalidCustomer'


class InvalidShortlist(ValidationError):
    kind = 'InvalidShortlist'


class InvalidTime(ValidationError):
    kind = 'InvalidTime'


class InvalidReview(ValidationError):
    kind = 'InvalidReview'


# =============================================================================
# LOOKUPS
# =============================================================================

class NotFound(BookingError):
    kind = 'NotFound'
    status = 404


class TourNotFound(NotFound):
    kind = 'TourNotFound'


class DriverNotFound(NotFound):
    kind = 'DriverNotFound'


# =============================================================================
# CONFLICTS
# =============================================================================

class Conflict(BookingError):
    kind = 'Conflict'
    status = 409


class DriverUnavailable(BookingError):
    """The (driver, date) slot was taken or blocked when checked before commit."""

    kind = 'DriverUnavailable'
    status = 409


class DriverAlreadyBooked(BookingError):
    """The uniqueness guard rejected the insert: a concurrent booking won the slot."""

    kind = 'DriverAlreadyBooked'
    status = 409


class InvalidTransition(BookingError):
    kind = 'InvalidTransition'
    status = 400


# =============================================================================
# REVIEWS
# =============================================================================

class ReviewNotAllowed(BookingError):
    """Only customers with a confirmed or completed booking may review a driver."""

    kind = 'ReviewNotAllowed'
    status = 403
