"""Attendance error taxonomy shared by the API and the client.

Every error carries the HTTP status the API answers with and a default
user-facing message. The client raises the location/network kinds itself;
they never leave the server.
"""
from typing import Optional


class AttendanceError(Exception):
    """Base class for RSVP / check-in failures."""

    status_code: int = 400
    default_message: str = "Request failed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__


class AlreadyRSVPed(AttendanceError):
    status_code = 409
    default_message = "You have already RSVP'd to this event."


class CapacityExceeded(AttendanceError):
    status_code = 409
    default_message = "This event has reached its RSVP limit."


class NotRSVPed(AttendanceError):
    status_code = 403
    default_message = "Cannot check in, not RSVP'd."


class AlreadyCheckedIn(AttendanceError):
    status_code = 409
    default_message = "Already checked in."


class NotAuthenticated(AttendanceError):
    status_code = 401
    default_message = "Not authenticated. Please log in again."


class EventNotInSession(AttendanceError):
    status_code = 400
    default_message = "You can only check in during the event session window."


class OutsideCheckInRadius(AttendanceError):
    status_code = 403
    default_message = "You are too far from the event location to check in."


class LocationUnavailable(AttendanceError):
    default_message = "Failed to retrieve your location. Please try again."


class PermissionDenied(AttendanceError):
    status_code = 403
    default_message = "Permission denied. Please allow location access."


class NetworkError(AttendanceError):
    status_code = 503
    default_message = "Network error. Please try again."
