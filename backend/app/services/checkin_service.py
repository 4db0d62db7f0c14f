"""Check-in validation and attendance recording.

The server is the authority on check-in: it re-runs the session-window,
RSVP and duplicate checks the client performs, then enforces the geofence
(``check_in_radius`` meters around the event coordinates).
"""
import logging
from datetime import datetime
from typing import Optional

from geopy.distance import geodesic
from sqlalchemy.orm import Session

from app.errors import AlreadyCheckedIn, EventNotInSession, NotRSVPed, OutsideCheckInRadius
from app.models.event import Event
from app.services.event_service import get_event_for_update
from app.services.session_window import is_event_in_session

logger = logging.getLogger(__name__)


def distance_to_event_m(event: Event, latitude: float, longitude: float) -> Optional[float]:
    """Geodesic distance in meters, or None when the event has no coordinates."""
    if event.event_lat is None or event.event_long is None:
        return None
    return geodesic((event.event_lat, event.event_long), (latitude, longitude)).meters


def validate_check_in(
    event: Event,
    user_id: str,
    latitude: float,
    longitude: float,
    now: Optional[datetime] = None,
) -> None:
    """Raise the first failing attendance rule; return None when check-in is allowed."""
    if not is_event_in_session(event.event_date, event.event_time, event.event_hours, now=now):
        raise EventNotInSession()
    if user_id in (event.event_attending or []):
        raise AlreadyCheckedIn()
    if user_id not in (event.event_rsvped or []):
        raise NotRSVPed()

    distance = distance_to_event_m(event, latitude, longitude)
    if distance is not None and distance > event.check_in_radius:
        logger.warning(
            "Rejected check-in for user %s at event %s: %.0fm away (radius %dm)",
            user_id, event.id, distance, event.check_in_radius,
        )
        raise OutsideCheckInRadius(
            f"You are {distance:.0f}m from the event; check-in requires being within "
            f"{event.check_in_radius}m."
        )


def record_attendance(event: Event, user_id: str) -> bool:
    """Append ``user_id`` to the attendance list once. Returns False if already present."""
    attending = list(event.event_attending or [])
    if user_id in attending:
        return False
    attending.append(user_id)
    event.event_attending = attending
    return True


def check_in(
    db: Session,
    event_id: str,
    user_id: str,
    latitude: float,
    longitude: float,
    accuracy: float = 0.0,
    include_hidden: bool = False,
    now: Optional[datetime] = None,
) -> Event:
    """Validate and record a check-in in a single transaction."""
    event = get_event_for_update(db, event_id, include_hidden=include_hidden)
    validate_check_in(event, user_id, latitude, longitude, now=now)
    record_attendance(event, user_id)
    db.commit()
    logger.info(
        "User %s checked in to event %s (lat=%.5f, long=%.5f, accuracy=%.0fm)",
        user_id, event_id, latitude, longitude, accuracy,
    )
    return event
