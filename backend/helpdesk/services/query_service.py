"""Query layer: the requests a given profile is entitled to see."""
import enum
import logging

from sqlalchemy.orm import Session

from helpdesk.errors import NotFoundError, ValidationError
from helpdesk.models.profile import Profile
from helpdesk.models.request import TicketRequest
from helpdesk.services import request_service

logger = logging.getLogger(__name__)


class ViewFilter(str, enum.Enum):
    all = "all"
    unassigned = "unassigned"
    assigned = "assigned"


def _parse_view(view_filter) -> ViewFilter:
    try:
        return ViewFilter(view_filter)
    except ValueError:
        raise ValidationError(f"Unknown view filter '{view_filter}'")


def list_requests(db: Session, viewer: Profile, view_filter: str = "all") -> list[TicketRequest]:
    """Requests visible to ``viewer``, newest first.

    Plain users always get their own requests and the filter is ignored.
    IT members and admins choose between every request, the unassigned
    ones, or the ones assigned to themselves.
    """
    if not viewer.is_staff:
        rows = request_service.scan_requests(db, user_id=viewer.profile_id).all()
        logger.debug("Listed %d own requests for %s", len(rows), viewer.profile_id)
        return rows

    view = _parse_view(view_filter)
    if view == ViewFilter.unassigned:
        query = request_service.scan_requests(db, unassigned=True)
    elif view == ViewFilter.assigned:
        query = request_service.scan_requests(db, assigned_to=viewer.profile_id)
    else:
        query = request_service.scan_requests(db)
    rows = query.all()
    logger.debug("Listed %d requests (%s) for %s", len(rows), view.value, viewer.profile_id)
    return rows


def get_visible_request(db: Session, viewer: Profile, request_id: str) -> TicketRequest:
    """Fetch one request, hiding other users' requests from plain users."""
    ticket = request_service.get_request(db, request_id)
    if not viewer.is_staff and ticket.user_id != viewer.profile_id:
        raise NotFoundError("Request not found")
    return ticket
