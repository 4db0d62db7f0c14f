"""Device geolocation abstraction.

Mirrors the browser ``getCurrentPosition`` contract: one fix per call,
bounded by a timeout, no retry. Implementations raise
:class:`~app.errors.PermissionDenied` or :class:`~app.errors.LocationUnavailable`.
"""
from dataclasses import dataclass
from typing import Protocol

from app.errors import LocationUnavailable


@dataclass(frozen=True)
class LocationFix:
    latitude: float
    longitude: float
    accuracy: float  # meters

    def is_usable(self) -> bool:
        # Zeroed coordinates or accuracy are what failed fixes look like.
        return self.latitude != 0 and self.longitude != 0 and self.accuracy != 0


@dataclass(frozen=True)
class PositionOptions:
    high_accuracy: bool = True
    timeout: float = 10.0  # seconds
    maximum_age: float = 0  # never reuse a cached fix


class Geolocator(Protocol):
    def current_position(self, options: PositionOptions) -> LocationFix:
        ...


class StaticGeolocator:
    """Reports a fixed position, e.g. for a check-in kiosk at a known venue."""

    def __init__(self, latitude: float, longitude: float, accuracy: float = 10.0):
        self._fix = LocationFix(latitude, longitude, accuracy)

    def current_position(self, options: PositionOptions) -> LocationFix:
        if not self._fix.is_usable():
            raise LocationUnavailable()
        return self._fix
