"""Profile API routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from helpdesk.database import get_db
from helpdesk.deps import get_current_profile
from helpdesk.schemas.profile import ProfileOut
from helpdesk.services import profile_service

router = APIRouter(dependencies=[Depends(get_current_profile)])


@router.get("/{profile_id}", response_model=ProfileOut)
def get_profile(profile_id: str, db: Session = Depends(get_db)):
    """Fetch a single profile by ID."""
    return profile_service.get_profile(db, profile_id)
