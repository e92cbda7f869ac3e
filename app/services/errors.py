"""Failures raised by the booking service.

The HTTP layer maps each concrete class to a status code; the service itself
never deals with HTTP.
"""

from __future__ import annotations


class BookingServiceError(Exception):
    """Base exception for booking service failures."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(BookingServiceError):
    """Raised when a request fails validation before touching the store."""


class MissingFields(InvalidArgument):
    """Raised when required booking fields are absent or empty."""

    default_message = "Some fields are missing"

    def __init__(self, missing_fields: list[str], message: str | None = None) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(message)


class InvalidMovieId(InvalidArgument):
    default_message = "Invalid movie ID format"


class InvalidSeatCount(InvalidArgument):
    default_message = "Invalid seat count"


class NotFound(BookingServiceError):
    """Raised when a movie or show cannot be located."""


class MovieNotFound(NotFound):
    default_message = "Requested movie is not found"


class ShowNotFound(NotFound):
    default_message = "Show not Found"


class Conflict(BookingServiceError):
    """Raised when the store state does not allow the booking."""


class NotEnoughSeats(Conflict):
    default_message = "Not enough seats available"


class InternalFailure(BookingServiceError):
    """Raised when the store misbehaves or cannot be reached."""


class UpdateFailed(InternalFailure):
    default_message = "Failed to update"


class StoreUnavailable(InternalFailure):
    pass


class CorruptShowData(InternalFailure):
    """Raised when a stored show carries a seat count that is not an integer."""

    default_message = "Stored seat count is invalid"
