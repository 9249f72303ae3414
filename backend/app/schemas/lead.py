from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class LeadStatus(StrEnum):
    NEW = "New"
    DISCOVERY = "Discovery"
    QUALIFIED = "Qualified"
    SHOWING = "Showing"
    NEGOTIATION = "Negotiation"
    CLOSED = "Closed"
    ARCHIVED = "Archived"


# Kanban column order; Archived sits outside the board
PIPELINE_ORDER: tuple[LeadStatus, ...] = (
    LeadStatus.NEW,
    LeadStatus.DISCOVERY,
    LeadStatus.QUALIFIED,
    LeadStatus.SHOWING,
    LeadStatus.NEGOTIATION,
    LeadStatus.CLOSED,
)


def next_status(status: LeadStatus) -> LeadStatus | None:
    """The column after ``status``, or None at Closed/Archived."""
    if status not in PIPELINE_ORDER:
        return None
    index = PIPELINE_ORDER.index(status)
    if index + 1 >= len(PIPELINE_ORDER):
        return None
    return PIPELINE_ORDER[index + 1]


class FinancingStatus(StrEnum):
    UNVERIFIED = "Unverified"
    CASH = "Cash"
    PRE_APPROVED = "Pre-Approved"
    FINANCING = "Financing"


class LeadCreate(BaseModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    property_id: str | None = None
    property_address: str | None = None
    chat_summary: str | None = None
    status: LeadStatus = LeadStatus.NEW
    notes: list[str] = Field(default_factory=list)


class LeadUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    status: LeadStatus | None = None
    notes: list[str] | None = None


class LeadNote(BaseModel):
    text: str


class LeadResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: str | None = None
    financing_status: FinancingStatus = FinancingStatus.UNVERIFIED
    property_id: str = "General"
    property_address: str = "N/A"
    status: LeadStatus = LeadStatus.NEW
    created_at: datetime
    notes: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}
