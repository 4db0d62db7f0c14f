"""Pydantic schemas for Announcements."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    is_pinned: bool = False


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    is_pinned: Optional[bool] = None


class AnnouncementOut(BaseModel):
    id: str
    title: str
    description: str
    is_pinned: bool
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
