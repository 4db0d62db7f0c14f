"""Event API routes — listing, admin CRUD, RSVP and check-in."""
import logging
from datetime import date, datetime
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.deps import get_current_user, require_admin
from app.models.user import User
from app.schemas.event import (
    CheckInPayload,
    EventCreate,
    EventOut,
    EventUpdate,
    MessageOut,
    PublicEventOut,
    RosterEntry,
    RSVPOut,
)
from app.services import checkin_service, event_service, rsvp_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/public", response_model=list[PublicEventOut])
def list_public_events(db: Session = Depends(get_db)):
    """Visible events for anonymous visitors, without RSVP / attendance lists."""
    return event_service.list_events(db)


@router.get("", response_model=list[EventOut])
def list_events(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """All events; hidden ones only for administrators."""
    return event_service.list_events(db, include_hidden=user.is_admin)


@router.get("/by-date", response_model=list[EventOut])
def list_events_by_date(
    on: Optional[date] = Query(None, alias="date"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Events on a given date (defaults to today in the chapter's timezone)."""
    if on is None:
        on = datetime.now(pytz.timezone(settings.EVENT_TIMEZONE)).date()
    return event_service.list_events(db, include_hidden=user.is_admin, on_date=on)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return event_service.get_event(db, event_id, include_hidden=user.is_admin)


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Create an event (admin only)."""
    return event_service.create_event(db, created_by_id=admin.user_id, fields=payload.model_dump())


@router.patch("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Partial update (admin only). Hiding an event is ``{"is_hidden": true}``."""
    return event_service.update_event(db, event_id, payload.model_dump(exclude_unset=True))


@router.delete("/{event_id}", response_model=MessageOut)
def delete_event(event_id: str, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    event_service.delete_event(db, event_id)
    return {"message": "Event deleted successfully"}


@router.post("/rsvp/{event_id}", response_model=RSVPOut)
def rsvp(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    count = rsvp_service.add_rsvp(db, event_id, user.user_id, include_hidden=user.is_admin)
    return {"message": "RSVP successful", "rsvp_count": count}


@router.post("/unrsvp/{event_id}", response_model=RSVPOut)
def unrsvp(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    count = rsvp_service.remove_rsvp(db, event_id, user.user_id, include_hidden=user.is_admin)
    return {"message": "RSVP cancelled", "rsvp_count": count}


@router.post("/checkin/{event_id}", response_model=MessageOut)
def check_in(
    event_id: str,
    payload: CheckInPayload,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record attendance if the event is in session and the caller is inside the geofence."""
    checkin_service.check_in(
        db,
        event_id,
        user.user_id,
        latitude=payload.latitude,
        longitude=payload.longitude,
        accuracy=payload.accuracy,
        include_hidden=user.is_admin,
    )
    return {"message": "Checked in successfully"}


@router.get("/{event_id}/rsvps", response_model=list[RosterEntry])
def list_rsvps(event_id: str, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    event = event_service.get_event(db, event_id, include_hidden=True)
    return event_service.resolve_roster(db, list(event.event_rsvped or []))


@router.get("/{event_id}/attendees", response_model=list[RosterEntry])
def list_attendees(event_id: str, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    event = event_service.get_event(db, event_id, include_hidden=True)
    return event_service.resolve_roster(db, list(event.event_attending or []))
