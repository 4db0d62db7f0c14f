"""Claims carried by identity-provider access tokens."""
from typing import Optional
from pydantic import BaseModel


class TokenPayload(BaseModel):
    sub: str
    email: Optional[str] = None
    aud: Optional[str] = None
    exp: Optional[int] = None
    role: Optional[str] = None
