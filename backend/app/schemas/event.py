"""Pydantic schemas for Events, RSVP and check-in."""
from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, Field

MAX_EVENT_HOURS = 24 * 365


class EventCreate(BaseModel):
    event_name: str = Field(min_length=1)
    event_description: str = ""
    event_location: str = Field(min_length=1)
    event_lat: Optional[float] = Field(None, ge=-90, le=90)
    event_long: Optional[float] = Field(None, ge=-180, le=180)
    event_date: date
    event_time: Optional[time] = None
    event_hours: float = Field(1.0, gt=0, le=MAX_EVENT_HOURS)
    event_hours_type: Optional[str] = None
    event_limit: Optional[int] = Field(None, ge=0)
    check_in_window: Optional[int] = Field(None, ge=0)
    check_in_radius: Optional[int] = Field(None, gt=0)
    sponsors_attending: list[str] = []
    is_hidden: bool = False


class EventUpdate(BaseModel):
    event_name: Optional[str] = Field(None, min_length=1)
    event_description: Optional[str] = None
    event_location: Optional[str] = Field(None, min_length=1)
    event_lat: Optional[float] = Field(None, ge=-90, le=90)
    event_long: Optional[float] = Field(None, ge=-180, le=180)
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    event_hours: Optional[float] = Field(None, gt=0, le=MAX_EVENT_HOURS)
    event_hours_type: Optional[str] = None
    event_limit: Optional[int] = Field(None, ge=0)
    check_in_window: Optional[int] = Field(None, ge=0)
    check_in_radius: Optional[int] = Field(None, gt=0)
    sponsors_attending: Optional[list[str]] = None
    is_hidden: Optional[bool] = None


class PublicEventOut(BaseModel):
    """Projection served to anonymous visitors, without membership lists."""

    id: str
    event_name: str
    event_description: str
    event_location: str
    event_lat: Optional[float] = None
    event_long: Optional[float] = None
    event_date: date
    event_time: Optional[time] = None
    event_hours: float
    event_hours_type: Optional[str] = None
    sponsors_attending: list[str] = []

    model_config = {"from_attributes": True}


class EventOut(PublicEventOut):
    event_limit: Optional[int] = None
    check_in_window: int
    check_in_radius: int
    event_rsvped: list[str] = []
    event_attending: list[str] = []
    is_hidden: bool
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CheckInPayload(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: float = Field(0.0, ge=0)


class MessageOut(BaseModel):
    message: str


class RSVPOut(MessageOut):
    rsvp_count: int


class RosterEntry(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
