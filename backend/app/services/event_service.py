"""Event administration service.

Responsibilities:
- Fetching events with hidden-event visibility rules
- Create / update / delete for administrators
- Geocoding the display location when coordinates are not supplied
- Resolving RSVP / attendance rosters to user records
"""
import logging
from datetime import date
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.config import settings
from app.models.event import Event
from app.models.user import User
from app.services.geocoding import GeocodingError, geocode_address

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = ("id", "event_rsvped", "event_attending", "created_by_id", "created_at")
_REQUIRED_FIELDS = (
    "event_name", "event_location", "event_date", "event_hours",
    "check_in_window", "check_in_radius", "is_hidden", "sponsors_attending",
)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")


def get_event(db: Session, event_id: str, include_hidden: bool = False) -> Event:
    query = db.query(Event).filter(Event.id == event_id)
    if not include_hidden:
        query = query.filter(Event.is_hidden.is_(False))
    event = query.first()
    if not event:
        raise _not_found()
    return event


def get_event_for_update(db: Session, event_id: str, include_hidden: bool = False) -> Event:
    """Load an event row locked for the rest of the transaction.

    ``with_for_update`` is a no-op on SQLite; on Postgres it serializes
    concurrent RSVP / check-in writes to the same event.
    """
    query = db.query(Event).filter(Event.id == event_id)
    if not include_hidden:
        query = query.filter(Event.is_hidden.is_(False))
    event = query.with_for_update().first()
    if not event:
        raise _not_found()
    return event


def list_events(db: Session, include_hidden: bool = False, on_date: Optional[date] = None) -> list[Event]:
    query = db.query(Event)
    if not include_hidden:
        query = query.filter(Event.is_hidden.is_(False))
    if on_date:
        query = query.filter(Event.event_date == on_date)
    return query.order_by(Event.event_date, Event.event_time).all()


def _check_coordinate_pair(fields: dict[str, Any]) -> None:
    """Latitude and longitude are supplied together or not at all."""
    if (fields.get("event_lat") is None) != (fields.get("event_long") is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="event_lat and event_long must be supplied together.",
        )


def _resolve_coordinates(location: str) -> tuple[float, float]:
    try:
        return geocode_address(location)
    except GeocodingError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


def create_event(db: Session, created_by_id: str, fields: dict[str, Any]) -> Event:
    """Create an event, geocoding its location when lat/long are missing."""
    fields = dict(fields)
    _check_coordinate_pair(fields)
    if fields.get("event_lat") is None or fields.get("event_long") is None:
        fields["event_lat"], fields["event_long"] = _resolve_coordinates(fields["event_location"])
    if fields.get("check_in_radius") is None:
        fields["check_in_radius"] = settings.DEFAULT_CHECK_IN_RADIUS_M
    if fields.get("check_in_window") is None:
        fields["check_in_window"] = settings.DEFAULT_CHECK_IN_WINDOW_MIN

    event = Event(
        **fields,
        event_rsvped=[],
        event_attending=[],
        created_by_id=created_by_id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by %s", event.event_name, event.id, created_by_id)
    return event


def update_event(db: Session, event_id: str, updates: dict[str, Any]) -> Event:
    """Apply a partial update; membership lists are never writable here."""
    event = get_event(db, event_id, include_hidden=True)

    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid update fields provided.")

    _check_coordinate_pair(updates)
    new_location = updates.get("event_location")
    location_changed = bool(new_location) and new_location != event.event_location
    coords_given = updates.get("event_lat") is not None
    if location_changed and not coords_given:
        updates["event_lat"], updates["event_long"] = _resolve_coordinates(new_location)

    for field, value in updates.items():
        if field in _IMMUTABLE_FIELDS or not hasattr(event, field):
            continue
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(updates)))
    return event


def delete_event(db: Session, event_id: str) -> None:
    event = get_event(db, event_id, include_hidden=True)
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s", event_id)


def resolve_roster(db: Session, user_ids: list[str]) -> list[dict[str, Any]]:
    """Map user ids to ``{user_id, email, name}`` preserving list order."""
    if not user_ids:
        return []
    users = {u.user_id: u for u in db.query(User).filter(User.user_id.in_(user_ids)).all()}
    roster = []
    for uid in user_ids:
        user = users.get(uid)
        roster.append({
            "user_id": uid,
            "email": user.email if user else None,
            "name": user.name if user else None,
        })
    return roster
