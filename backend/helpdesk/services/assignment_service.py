"""Assignment rule engine — an IT staff member takes ownership of an open request.

The take-over is a single conditional UPDATE:

    UPDATE requests SET assigned_to = :actor, status = 'en_cours'
    WHERE request_id = :id AND status = 'ouvert' AND assigned_to IS NULL

and the affected-row count decides the winner. Reading the row first and
writing it afterwards would let two concurrent callers both observe an
unassigned request and both claim it.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from helpdesk.errors import PermissionDeniedError
from helpdesk.models.request import RequestStatus, TicketRequest
from helpdesk.services.profile_service import get_profile

logger = logging.getLogger(__name__)


def assign_to_self(db: Session, request_id: str, actor_id: str) -> bool:
    """Claim ``request_id`` for ``actor_id``.

    Returns True when this call performed the ``ouvert → en_cours`` transition,
    False when the request is missing, no longer open or already taken. A
    False result is a normal outcome: the caller should re-read and decide.
    """
    actor = get_profile(db, actor_id)
    if not actor.is_staff:
        raise PermissionDeniedError("Only IT members and admins may take a request")

    now = datetime.now(timezone.utc)
    updated = (
        db.query(TicketRequest)
        .filter(
            TicketRequest.request_id == request_id,
            TicketRequest.status == RequestStatus.ouvert,
            TicketRequest.assigned_to.is_(None),
        )
        .update(
            {
                TicketRequest.assigned_to: actor_id,
                TicketRequest.status: RequestStatus.en_cours,
                TicketRequest.updated_at: now,
            },
            synchronize_session=False,
        )
    )
    db.commit()

    if updated == 1:
        logger.info("Request %s assigned to %s", request_id, actor_id)
        return True
    logger.info("Assignment of request %s to %s lost: not open or already taken", request_id, actor_id)
    return False
