"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from helpdesk.config import settings
from helpdesk.database import Base, engine

# Import routers
from helpdesk.routers import auth, options, profiles, requests

# Import all models so Base.metadata knows about them
from helpdesk.models.profile import Profile             # noqa: F401
from helpdesk.models.auth_session import AuthSession    # noqa: F401
from helpdesk.models.request import TicketRequest       # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Helpdesk",
    description="Internal IT ticketing: incidents and equipment orders, claimed and closed by IT staff",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])
app.include_router(requests.router, prefix="/api/requests", tags=["Requests"])
app.include_router(options.router, prefix="/api/options", tags=["Options"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
