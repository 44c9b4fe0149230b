"""Auth API routes — sign-up, sign-in, sign-out and the current profile."""
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from helpdesk.database import get_db
from helpdesk.deps import get_bearer_token, get_current_profile
from helpdesk.models.profile import Profile
from helpdesk.schemas.profile import ProfileOut, SignIn, SignUp, TokenOut
from helpdesk.services import profile_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUp, db: Session = Depends(get_db)):
    """Register a new account; its profile starts with role 'user'."""
    return profile_service.sign_up(db, payload.email, payload.password, payload.service)


@router.post("/signin", response_model=TokenOut)
def sign_in(payload: SignIn, db: Session = Depends(get_db)):
    token, profile = profile_service.sign_in(db, payload.email, payload.password)
    return TokenOut(access_token=token, profile=ProfileOut.model_validate(profile))


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)):
    """Revoke the session behind the presented token."""
    profile_service.sign_out(db, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=ProfileOut)
def me(profile: Profile = Depends(get_current_profile)):
    return profile
