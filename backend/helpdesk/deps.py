"""Shared FastAPI dependencies: the authenticated caller."""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from helpdesk.database import get_db
from helpdesk.errors import AuthenticationError
from helpdesk.models.profile import Profile
from helpdesk.services import profile_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> str:
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    return credentials.credentials


def get_current_profile(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> Profile:
    return profile_service.current_identity(db, token)
