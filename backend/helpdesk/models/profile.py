"""Profile ORM model — one row per authenticated identity."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from helpdesk.database import Base


class Role(str, enum.Enum):
    user = "user"
    it_member = "it_member"
    admin = "admin"


STAFF_ROLES = (Role.it_member, Role.admin)


class Profile(Base):
    __tablename__ = "profiles"

    profile_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False, default="")
    service = Column(String(100), nullable=False)
    role = Column(SAEnum(Role), nullable=False, default=Role.user)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
