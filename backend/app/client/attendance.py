"""Client-side RSVP toggle and check-in flow for a single event.

All failures are recovered here and reported through ``notify``; local
state only changes after the server confirms. Checks that the client can
decide on its own (session window, auth, duplicate check-in, missing RSVP)
run before any request is sent.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from app.client.api import ApiError, MembershipApiClient
from app.client.geolocation import Geolocator, LocationFix, PositionOptions
from app.errors import (
    AlreadyCheckedIn,
    AttendanceError,
    EventNotInSession,
    LocationUnavailable,
    NotAuthenticated,
    NotRSVPed,
)
from app.services.session_window import is_event_in_session

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]  # (message, "success" | "error")


class AttendanceState(str, enum.Enum):
    not_rsvped = "NotRSVPed"
    rsvped = "RSVPed"
    checked_in = "CheckedIn"


@dataclass
class UserSession:
    access_token: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.user_id)


class AttendanceController:
    def __init__(
        self,
        api: MembershipApiClient,
        event: dict[str, Any],
        session: UserSession,
        geolocator: Geolocator,
        notify: Notifier,
        clock: Optional[Callable[[], datetime]] = None,
        position_options: Optional[PositionOptions] = None,
        on_check_in: Optional[Callable[[], None]] = None,
    ):
        self.api = api
        self.event_id = event["id"]
        self.event_date = event.get("event_date")
        self.event_time = event.get("event_time")
        self.event_hours = event.get("event_hours")
        self.rsvped = list(event.get("event_rsvped") or [])
        self.attending = list(event.get("event_attending") or [])
        self.session = session
        self.geolocator = geolocator
        self.notify = notify
        self.clock = clock
        self.position_options = position_options or PositionOptions()
        self.on_check_in = on_check_in

    @property
    def state(self) -> AttendanceState:
        uid = self.session.user_id
        if uid and uid in self.attending:
            return AttendanceState.checked_in
        if uid and uid in self.rsvped:
            return AttendanceState.rsvped
        return AttendanceState.not_rsvped

    def in_session(self) -> bool:
        now = self.clock() if self.clock else None
        return is_event_in_session(self.event_date, self.event_time, self.event_hours, now=now)

    def _locate(self) -> LocationFix:
        fix = self.geolocator.current_position(self.position_options)
        if not fix.is_usable():
            raise LocationUnavailable()
        return fix

    def validate_check_in(self) -> LocationFix:
        """Run the local checks in order and return a usable location fix."""
        if not self.in_session():
            raise EventNotInSession()
        if not self.session.is_authenticated:
            raise NotAuthenticated()
        if self.session.user_id in self.attending:
            raise AlreadyCheckedIn()
        if self.session.user_id not in self.rsvped:
            raise NotRSVPed()
        return self._locate()

    def check_in(self) -> bool:
        """Attempt a check-in; returns True once the server has recorded it."""
        try:
            fix = self.validate_check_in()
            data = self.api.check_in(self.event_id, fix.latitude, fix.longitude, fix.accuracy)
        except (AttendanceError, ApiError) as exc:
            logger.info("Check-in for event %s not completed: %s", self.event_id, exc.message)
            self.notify(exc.message, "error")
            return False

        self.attending.append(self.session.user_id)
        self.notify(data.get("message") or "Checked in.", "success")
        if self.on_check_in:
            self.on_check_in()
        return True

    def toggle_rsvp(self) -> bool:
        """RSVP, or cancel an existing RSVP. Returns True when the server accepted it."""
        if not self.session.is_authenticated:
            self.notify(NotAuthenticated.default_message, "error")
            return False
        if self.state == AttendanceState.checked_in:
            self.notify("You have already checked in to this event.", "error")
            return False

        cancelling = self.state == AttendanceState.rsvped
        try:
            if cancelling:
                data = self.api.unrsvp(self.event_id)
            else:
                data = self.api.rsvp(self.event_id)
        except (AttendanceError, ApiError) as exc:
            self.notify(exc.message, "error")
            return False

        if cancelling:
            self.rsvped.remove(self.session.user_id)
        else:
            self.rsvped.append(self.session.user_id)
        self.notify(data.get("message") or "Done.", "success")
        return True
