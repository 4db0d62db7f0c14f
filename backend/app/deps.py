"""Request dependencies: database session and bearer-token authentication.

Access tokens are issued by the hosted identity provider (HS256, shared
secret). Only the ``sub`` and ``email`` claims are used; roles come from
the ``users`` table.
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import NotAuthenticated
from app.models.user import User, UserRole
from app.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> TokenPayload:
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.JWT_AUDIENCE,
        )
        return TokenPayload(**payload)
    except (JWTError, ValueError) as exc:
        logger.info("Token verification failed: %s", exc)
        raise NotAuthenticated("Invalid token")


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenPayload:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise NotAuthenticated("No authorization token provided")
    return decode_token(credentials.credentials)


def get_current_user(
    token: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    """Return the caller's user row, provisioning a general member on first sight."""
    user = db.query(User).filter(User.user_id == token.sub).first()
    if user:
        return user
    if not token.email:
        raise NotAuthenticated("Token has no email claim")

    user = User(user_id=token.sub, email=token.email, name="", role=UserRole.general_member)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Provisioned user %s (%s)", user.user_id, user.email)
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return user
