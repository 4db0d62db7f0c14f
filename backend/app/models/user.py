"""User ORM model: identity-provider accounts with a chapter role."""
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from app.database import Base


class UserRole(str, enum.Enum):
    general_member = "general-member"
    e_board = "e-board"
    sponsor = "sponsor"
    admin = "admin"


ADMIN_ROLES = (UserRole.e_board, UserRole.admin)


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)  # identity-provider subject
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(150), nullable=False, default="")
    role = Column(
        SAEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.general_member,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
