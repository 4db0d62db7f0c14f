"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.deps import get_current_user, require_admin
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate, UserOut

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_role(value: str) -> UserRole:
    try:
        return UserRole(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid role: {value}")


@router.get("/me", response_model=UserOut)
def get_me(user: User = Depends(get_current_user)):
    """The caller's own record (created on first request)."""
    return user


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Register a user with a role ahead of their first login."""
    role = _parse_role(payload.role)
    existing = (
        db.query(User)
        .filter((User.user_id == payload.user_id) | (User.email == payload.email))
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="User already exists")

    user = User(user_id=payload.user_id, email=payload.email, name=payload.name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s) as %s", user.user_id, user.email, role.value)
    return user


@router.get("", response_model=list[UserOut])
def list_users(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    """List all users."""
    return db.query(User).order_by(User.email).all()


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    payload: UserUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Change a user's display name or role."""
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("role") is not None:
        user.role = _parse_role(updates["role"])
    if updates.get("name") is not None:
        user.name = updates["name"]
    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user
