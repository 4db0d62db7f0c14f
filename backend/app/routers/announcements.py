"""Announcement API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.deps import get_current_user, require_admin
from app.models.announcement import Announcement
from app.models.user import User
from app.schemas.announcement import AnnouncementCreate, AnnouncementOut, AnnouncementUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_or_404(db: Session, announcement_id: str) -> Announcement:
    announcement = db.query(Announcement).filter(Announcement.id == announcement_id).first()
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return announcement


@router.get("", response_model=list[AnnouncementOut])
def list_announcements(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Pinned announcements first, then newest first."""
    return (
        db.query(Announcement)
        .order_by(Announcement.is_pinned.desc(), Announcement.created_at.desc())
        .all()
    )


@router.post("", response_model=AnnouncementOut, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: AnnouncementCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    announcement = Announcement(**payload.model_dump(), created_by_id=admin.user_id)
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    logger.info("Created announcement '%s' (%s)", announcement.title, announcement.id)
    return announcement


@router.patch("/{announcement_id}", response_model=AnnouncementOut)
def update_announcement(
    announcement_id: str,
    payload: AnnouncementUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    announcement = _get_or_404(db, announcement_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(announcement, field, value)
    db.commit()
    db.refresh(announcement)
    logger.info("Updated announcement %s", announcement_id)
    return announcement


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(
    announcement_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    announcement = _get_or_404(db, announcement_id)
    db.delete(announcement)
    db.commit()
    logger.info("Deleted announcement %s", announcement_id)
