"""RSVP tracking — reserve and release a spot on an event.

The RSVP count is what ``event_limit`` caps; check-in never re-checks it.
"""
import logging

from sqlalchemy.orm import Session

from app.errors import AlreadyCheckedIn, AlreadyRSVPed, CapacityExceeded
from app.models.event import Event
from app.services.event_service import get_event_for_update

logger = logging.getLogger(__name__)


def has_capacity(event: Event) -> bool:
    if event.event_limit is None:
        return True
    return len(event.event_rsvped or []) < event.event_limit


def add_rsvp(db: Session, event_id: str, user_id: str, include_hidden: bool = False) -> int:
    """Append ``user_id`` to the RSVP list and return the new RSVP count."""
    event = get_event_for_update(db, event_id, include_hidden=include_hidden)
    rsvped = list(event.event_rsvped or [])

    if user_id in rsvped:
        raise AlreadyRSVPed()
    if not has_capacity(event):
        raise CapacityExceeded()

    rsvped.append(user_id)
    event.event_rsvped = rsvped
    db.commit()
    logger.info("User %s RSVP'd to event %s (%d/%s)", user_id, event_id, len(rsvped), event.event_limit)
    return len(rsvped)


def remove_rsvp(db: Session, event_id: str, user_id: str, include_hidden: bool = False) -> int:
    """Drop ``user_id`` from the RSVP list; absent users are a no-op."""
    event = get_event_for_update(db, event_id, include_hidden=include_hidden)
    rsvped = list(event.event_rsvped or [])

    if user_id in (event.event_attending or []):
        raise AlreadyCheckedIn("You have already checked in and cannot cancel your RSVP.")
    if user_id not in rsvped:
        db.rollback()
        return len(rsvped)

    rsvped.remove(user_id)
    event.event_rsvped = rsvped
    db.commit()
    logger.info("User %s cancelled RSVP for event %s", user_id, event_id)
    return len(rsvped)
