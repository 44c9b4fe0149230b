"""Request store — creation, lookup, raw scans and closure.

Responsibilities:
- Field validation on create (required fields, enumerated values)
- Lifecycle allow-list: ouvert → en_cours → termine, nothing else
- Closure authorization: assignee or admin only
- Conditional writes so a lost race never overwrites a newer state
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Query, Session

from helpdesk.catalog import SERVICES
from helpdesk.errors import InvalidStateError, NotFoundError, PermissionDeniedError, ValidationError
from helpdesk.models.profile import Profile, Role
from helpdesk.models.request import ALLOWED_TRANSITIONS, Priority, RequestStatus, RequestType, TicketRequest
from helpdesk.services.profile_service import get_profile

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("type", "title", "description", "location", "service_demandeur")
# Columns stored as String(255).
MAX_LENGTHS = {"title": 255, "location": 255, "category": 255}


def ensure_transition(old: RequestStatus, new: RequestStatus) -> None:
    if new not in ALLOWED_TRANSITIONS[old]:
        raise InvalidStateError(f"Transition not allowed: {old.value} → {new.value}")


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _validate_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Return the cleaned column values for a new request or raise ValidationError."""
    cleaned = {name: _clean(fields.get(name)) for name in REQUIRED_FIELDS}
    missing = [name for name, value in cleaned.items() if value is None]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    try:
        request_type = RequestType(cleaned["type"])
    except ValueError:
        raise ValidationError(f"Invalid type '{cleaned['type']}'")

    raw_priority = _clean(fields.get("priority")) or Priority.basse.value
    try:
        priority = Priority(raw_priority)
    except ValueError:
        raise ValidationError(f"Invalid priority '{raw_priority}'")

    if cleaned["service_demandeur"] not in SERVICES:
        raise ValidationError(f"Unknown service_demandeur '{cleaned['service_demandeur']}'")

    category = _clean(fields.get("category"))
    lengths = {"title": cleaned["title"], "location": cleaned["location"], "category": category}
    for name, value in lengths.items():
        if value is not None and len(value) > MAX_LENGTHS[name]:
            raise ValidationError(f"{name} must be at most {MAX_LENGTHS[name]} characters")

    return {
        "type": request_type,
        "category": category,
        "title": cleaned["title"],
        "description": cleaned["description"],
        "location": cleaned["location"],
        "priority": priority,
        "service_demandeur": cleaned["service_demandeur"],
    }


def create_request(db: Session, creator_id: str, fields: dict[str, Any]) -> TicketRequest:
    """Insert a new open, unassigned request on behalf of ``creator_id``."""
    values = _validate_fields(fields)
    get_profile(db, creator_id)

    ticket = TicketRequest(
        user_id=creator_id,
        status=RequestStatus.ouvert,
        assigned_to=None,
        **values,
    )
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    logger.info("Created %s request %s '%s' by %s", ticket.type.value, ticket.request_id, ticket.title, creator_id)
    return ticket


def get_request(db: Session, request_id: str) -> TicketRequest:
    ticket = db.get(TicketRequest, request_id)
    if not ticket:
        raise NotFoundError("Request not found")
    return ticket


def scan_requests(
    db: Session,
    user_id: Optional[str] = None,
    assigned_to: Optional[str] = None,
    unassigned: bool = False,
) -> Query:
    """Raw filtered scan, newest first. No visibility rules are applied here."""
    query = db.query(TicketRequest)
    if user_id is not None:
        query = query.filter(TicketRequest.user_id == user_id)
    if assigned_to is not None:
        query = query.filter(TicketRequest.assigned_to == assigned_to)
    if unassigned:
        query = query.filter(TicketRequest.assigned_to.is_(None))
    return query.order_by(TicketRequest.created_at.desc())


def _check_close_permission(ticket: TicketRequest, actor: Profile) -> None:
    if actor.role != Role.admin and ticket.assigned_to != actor.profile_id:
        raise PermissionDeniedError("Only the assignee or an admin may close this request")


def close_request(db: Session, request_id: str, actor_id: str) -> TicketRequest:
    """Move an in-progress request to ``termine`` and stamp ``closed_at``."""
    ticket = get_request(db, request_id)
    actor = get_profile(db, actor_id)

    # Ownership only exists once someone has taken the request.
    if ticket.assigned_to is None:
        ensure_transition(ticket.status, RequestStatus.termine)
    _check_close_permission(ticket, actor)
    ensure_transition(ticket.status, RequestStatus.termine)

    now = datetime.now(timezone.utc)
    updated = (
        db.query(TicketRequest)
        .filter(
            TicketRequest.request_id == request_id,
            TicketRequest.status == RequestStatus.en_cours,
        )
        .update(
            {
                TicketRequest.status: RequestStatus.termine,
                TicketRequest.closed_at: now,
                TicketRequest.updated_at: now,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    if updated != 1:
        raise InvalidStateError("Request was closed concurrently")

    db.refresh(ticket)
    logger.info("Request %s closed by %s", request_id, actor_id)
    return ticket
