"""Pydantic schemas for TicketRequests."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from helpdesk.schemas.profile import ProfileSummary


class RequestCreate(BaseModel):
    type: str  # incident, order
    category: Optional[str] = Field(None, max_length=255)
    title: str = Field(max_length=255)
    description: str
    location: str = Field(max_length=255)
    priority: str = "basse"  # basse, moyenne, urgente
    service_demandeur: str


class RequestOut(BaseModel):
    request_id: str
    user_id: str
    type: str
    category: Optional[str] = None
    title: str
    description: str
    location: str
    priority: str
    service_demandeur: str
    status: str
    assigned_to: Optional[str] = None
    created_at: datetime
    closed_at: Optional[datetime] = None
    creator: ProfileSummary
    assignee: Optional[ProfileSummary] = None

    model_config = {"from_attributes": True}


class AssignmentOut(BaseModel):
    request_id: str
    assigned: bool


class OptionsOut(BaseModel):
    services: list[str]
    types: list[str]
    priorities: list[str]
    incident_categories: list[str]
    order_categories: list[str]
