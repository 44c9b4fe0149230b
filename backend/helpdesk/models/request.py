"""TicketRequest ORM model — an IT incident or equipment order."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, Column, String, Text, DateTime, ForeignKey, Index, Enum as SAEnum
from sqlalchemy.orm import relationship
from helpdesk.database import Base


class RequestType(str, enum.Enum):
    incident = "incident"
    order = "order"


class Priority(str, enum.Enum):
    basse = "basse"
    moyenne = "moyenne"
    urgente = "urgente"


class RequestStatus(str, enum.Enum):
    ouvert = "ouvert"
    en_cours = "en_cours"
    termine = "termine"


ALLOWED_TRANSITIONS = {
    RequestStatus.ouvert: {RequestStatus.en_cours},
    RequestStatus.en_cours: {RequestStatus.termine},
    RequestStatus.termine: set(),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketRequest(Base):
    __tablename__ = "requests"
    __table_args__ = (
        CheckConstraint(
            "(status = 'ouvert' AND assigned_to IS NULL) OR (status != 'ouvert' AND assigned_to IS NOT NULL)",
            name="ck_requests_assignee_matches_status",
        ),
        CheckConstraint(
            "(status = 'termine' AND closed_at IS NOT NULL) OR (status != 'termine' AND closed_at IS NULL)",
            name="ck_requests_closed_at_matches_status",
        ),
        Index("ix_requests_created_at", "created_at"),
    )

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.profile_id"), nullable=False, index=True)
    type = Column(SAEnum(RequestType), nullable=False)
    category = Column(String(255), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    priority = Column(SAEnum(Priority), nullable=False, default=Priority.basse)
    service_demandeur = Column(String(100), nullable=False)
    status = Column(SAEnum(RequestStatus), nullable=False, default=RequestStatus.ouvert)
    assigned_to = Column(String(36), ForeignKey("profiles.profile_id"), nullable=True, index=True)
    # Python-side default keeps microsecond precision on every backend.
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    closed_at = Column(DateTime(timezone=True), nullable=True)

    creator = relationship("Profile", foreign_keys=[user_id], lazy="joined")
    assignee = relationship("Profile", foreign_keys=[assigned_to], lazy="joined")
