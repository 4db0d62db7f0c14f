"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Date, Time, Float, Integer, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from app.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_name = Column(String(255), nullable=False)
    event_description = Column(Text, nullable=False, default="")
    event_location = Column(String(500), nullable=False, default="")
    event_lat = Column(Float, nullable=True)
    event_long = Column(Float, nullable=True)
    event_date = Column(Date, nullable=False, index=True)
    event_time = Column(Time, nullable=True)  # local time-of-day in EVENT_TIMEZONE
    event_hours = Column(Float, nullable=False, default=1.0)
    event_hours_type = Column(String(50), nullable=True)
    event_limit = Column(Integer, nullable=True)  # None = unlimited RSVPs
    check_in_window = Column(Integer, nullable=False, default=15)  # minutes
    check_in_radius = Column(Integer, nullable=False, default=100)  # meters
    # Ordered user-id lists; reassign rather than mutate in place so changes flush.
    event_rsvped = Column(JSON, nullable=False, default=list)
    event_attending = Column(JSON, nullable=False, default=list)
    sponsors_attending = Column(JSON, nullable=False, default=list)
    is_hidden = Column(Boolean, nullable=False, default=False)
    created_by_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
