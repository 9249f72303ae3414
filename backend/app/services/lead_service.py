from __future__ import annotations

import json
import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from app.database import commit_or_raise
from app.models.lead import Lead
from app.schemas.lead import (
    FinancingStatus,
    LeadCreate,
    LeadResponse,
    LeadStatus,
    next_status,
)
from app.services.realtime import ChangeEvent, ChangeFeed, change_feed
from app.utils.exceptions import InvalidTransitionError, LeadNotFoundError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

DEFAULT_CAPTURE_SUMMARY = "Captured via AI Concierge"

# First match wins
_FINANCING_KEYWORDS: tuple[tuple[FinancingStatus, tuple[str, ...]], ...] = (
    (FinancingStatus.CASH, ("cash",)),
    (FinancingStatus.PRE_APPROVED, ("pre-approv", "preapprov", "pre approv")),
    (FinancingStatus.FINANCING, ("mortgage", "loan", "financ")),
)


def derive_financing_status(texts: list[str]) -> FinancingStatus:
    haystack = " ".join(texts).lower()
    for status, keywords in _FINANCING_KEYWORDS:
        if any(kw in haystack for kw in keywords):
            return status
    return FinancingStatus.UNVERIFIED


def to_response(lead: Lead) -> LeadResponse:
    notes = lead.notes_list
    return LeadResponse(
        id=lead.id,
        name=lead.name or "New Prospect",
        phone=lead.phone or "N/A",
        email=lead.email,
        financing_status=derive_financing_status([*notes, lead.chat_summary or ""]),
        property_id=lead.property_id or "General",
        property_address=lead.property_address or "N/A",
        status=LeadStatus(lead.status) if lead.status else LeadStatus.NEW,
        created_at=lead.created_at,
        notes=notes,
    )


def _get_lead(db: Session, owner_id: str, lead_id: str) -> Lead:
    lead = db.query(Lead).filter(Lead.owner_id == owner_id, Lead.id == lead_id).first()
    if not lead:
        raise LeadNotFoundError(f"Lead {lead_id} not found")
    return lead


def list_leads(db: Session, owner_id: str) -> list[LeadResponse]:
    leads = (
        db.query(Lead)
        .filter(Lead.owner_id == owner_id)
        .order_by(Lead.created_at.desc())
        .all()
    )
    return [to_response(lead) for lead in leads]


def get_lead(db: Session, owner_id: str, lead_id: str) -> LeadResponse:
    return to_response(_get_lead(db, owner_id, lead_id))


def create_lead(
    db: Session,
    owner_id: str,
    body: LeadCreate,
    feed: ChangeFeed = change_feed,
) -> LeadResponse:
    summary = body.chat_summary or (body.notes[0] if body.notes else DEFAULT_CAPTURE_SUMMARY)
    notes = body.notes or [summary]

    lead = Lead(
        owner_id=owner_id,
        name=body.name or "New Prospect",
        phone=body.phone or "N/A",
        email=body.email,
        property_id=body.property_id or "General",
        property_address=body.property_address or "N/A",
        chat_summary=summary,
        status=body.status.value,
        notes=json.dumps(notes),
    )
    db.add(lead)
    commit_or_raise(db, "save lead", "leads")
    db.refresh(lead)

    response = to_response(lead)
    feed.publish(
        ChangeEvent(
            table="leads",
            owner_id=owner_id,
            record=response.model_dump(mode="json"),
        )
    )
    logger.info("Lead %s captured for owner %s", lead.id, owner_id)
    return response


def update_lead(
    db: Session, owner_id: str, lead_id: str, updates: dict[str, Any]
) -> LeadResponse:
    lead = _get_lead(db, owner_id, lead_id)
    for key, value in updates.items():
        if value is None:
            continue
        if key == "notes":
            lead.notes = json.dumps(list(value))
        elif key == "status":
            lead.status = LeadStatus(value).value
        else:
            setattr(lead, key, value)
    commit_or_raise(db, "update lead", "leads")
    db.refresh(lead)
    return to_response(lead)


def advance_lead(db: Session, owner_id: str, lead_id: str) -> LeadResponse:
    """Move a lead to the next kanban column."""
    lead = _get_lead(db, owner_id, lead_id)
    target = next_status(LeadStatus(lead.status))
    if target is None:
        raise InvalidTransitionError(f"Lead in {lead.status} has no next stage")
    return update_lead(db, owner_id, lead_id, {"status": target})


def add_note(
    db: Session, owner_id: str, lead_id: str, text: str, today: date | None = None
) -> LeadResponse:
    text = text.strip()
    if not text:
        raise ValueError("Note text is empty")
    lead = _get_lead(db, owner_id, lead_id)
    stamp = (today or date.today()).isoformat()
    notes = [*lead.notes_list, f"{stamp}: {text}"]
    return update_lead(db, owner_id, lead_id, {"notes": notes})


def delete_lead(db: Session, owner_id: str, lead_id: str) -> bool:
    lead = _get_lead(db, owner_id, lead_id)
    db.delete(lead)
    commit_or_raise(db, "delete lead", "leads")
    return True
