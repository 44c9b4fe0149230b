"""Identity provider and profile store.

Sign-up creates the Profile (role ``user``) in the same transaction as the
credentials; sign-in opens a server-side AuthSession whose id is embedded in
the bearer token, and sign-out revokes it.
"""
import logging
from datetime import datetime, timezone

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from helpdesk.catalog import SERVICES
from helpdesk.errors import AuthenticationError, NotFoundError, ValidationError
from helpdesk.models.auth_session import AuthSession
from helpdesk.models.profile import Profile, Role
from helpdesk.security import create_access_token, decode_token, hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _email_taken(db: Session, email: str) -> bool:
    return db.query(Profile).filter(Profile.email == email).first() is not None


def get_profile(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if not profile:
        raise NotFoundError("Profile not found")
    return profile


def sign_up(db: Session, email: str, password: str, service: str) -> Profile:
    """Register credentials and create the matching Profile with role ``user``."""
    email = _normalize_email(email)
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError("A valid email address is required")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if service not in SERVICES:
        raise ValidationError(f"Unknown service '{service}'")
    if _email_taken(db, email):
        raise ValidationError("Email is already registered")

    profile = Profile(
        email=email,
        password_hash=hash_password(password),
        service=service,
        role=Role.user,
    )
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent sign-up with the same email committed first.
        db.rollback()
        raise ValidationError("Email is already registered")
    db.refresh(profile)
    logger.info("Signed up profile %s (%s, service %s)", profile.profile_id, email, service)
    return profile


def sign_in(db: Session, email: str, password: str) -> tuple[str, Profile]:
    """Check credentials, open an AuthSession and return ``(token, profile)``."""
    profile = db.query(Profile).filter(Profile.email == _normalize_email(email)).first()
    if not profile or not verify_password(password, profile.password_hash):
        logger.warning("Rejected sign-in for %s", email)
        raise AuthenticationError("Incorrect email or password")

    session = AuthSession(profile_id=profile.profile_id)
    db.add(session)
    db.commit()
    db.refresh(profile)
    token = create_access_token(profile.profile_id, session.session_id)
    logger.info("Profile %s signed in (session %s)", profile.profile_id, session.session_id)
    return token, profile


def _active_session(db: Session, token: str) -> AuthSession:
    try:
        claims = decode_token(token)
    except jwt.PyJWTError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise AuthenticationError("Invalid or expired token")

    sid = claims.get("sid")
    session = db.get(AuthSession, sid) if sid else None
    if not session or session.revoked_at is not None or session.profile_id != claims.get("sub"):
        raise AuthenticationError("Session is no longer valid")
    return session


def current_identity(db: Session, token: str) -> Profile:
    """Resolve a bearer token to its Profile."""
    session = _active_session(db, token)
    profile = db.get(Profile, session.profile_id)
    if not profile:
        raise AuthenticationError("Profile not found")
    return profile


def sign_out(db: Session, token: str) -> None:
    session = _active_session(db, token)
    session.revoked_at = datetime.now(timezone.utc)
    db.commit()
    logger.info("Session %s revoked", session.session_id)
