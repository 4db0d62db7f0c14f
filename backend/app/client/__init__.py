"""Python client for the membership API's attendance endpoints."""
from app.client.api import ApiError, MembershipApiClient
from app.client.attendance import AttendanceController, AttendanceState, UserSession
from app.client.geolocation import Geolocator, LocationFix, PositionOptions, StaticGeolocator

__all__ = [
    "ApiError",
    "AttendanceController",
    "AttendanceState",
    "Geolocator",
    "LocationFix",
    "MembershipApiClient",
    "PositionOptions",
    "StaticGeolocator",
    "UserSession",
]
