"""Pydantic schemas for Users."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.models.user import UserRole


class UserCreate(BaseModel):
    user_id: str = Field(min_length=1)
    email: str = Field(min_length=3)
    name: str = ""
    role: str = "general-member"


class UserUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None


class UserOut(BaseModel):
    user_id: str
    email: str
    name: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
