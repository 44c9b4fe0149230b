"""Request API routes: thin bindings over the request, assignment and query services."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from helpdesk.database import get_db
from helpdesk.deps import get_current_profile
from helpdesk.models.profile import Profile
from helpdesk.schemas.request import AssignmentOut, RequestCreate, RequestOut
from helpdesk.services import assignment_service, query_service, request_service

router = APIRouter()


@router.post("/", response_model=RequestOut, status_code=status.HTTP_201_CREATED)
def create_request(
    payload: RequestCreate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Open a new incident or order on behalf of the caller."""
    return request_service.create_request(db, profile.profile_id, payload.model_dump())


@router.get("/", response_model=list[RequestOut])
def list_requests(
    view: str = Query("all", description="all, unassigned or assigned (IT staff only)"),
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """List the requests visible to the caller, newest first."""
    return query_service.list_requests(db, profile, view)


@router.get("/{request_id}", response_model=RequestOut)
def get_request(
    request_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return query_service.get_visible_request(db, profile, request_id)


@router.post("/{request_id}/assign", response_model=AssignmentOut)
def assign_to_self(
    request_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Take ownership of an open request.

    ``assigned`` is false when someone else got there first or the request is
    no longer open; the client should refresh its list.
    """
    assigned = assignment_service.assign_to_self(db, request_id, profile.profile_id)
    return AssignmentOut(request_id=request_id, assigned=assigned)


@router.post("/{request_id}/close", response_model=RequestOut)
def close_request(
    request_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Mark an in-progress request as done (assignee or admin only)."""
    return request_service.close_request(db, request_id, profile.profile_id)
