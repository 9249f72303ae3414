"""Session-side lead list with optimistic capture.

Three things touch the list for one capture: the optimistic insert, the
write acknowledgement, and the realtime INSERT event. The provider does not
order the last two, so every change goes through :func:`merge_lead`, keyed
by lead id, and the final list is the same whichever arrives first.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from app.schemas.lead import LeadCreate, LeadResponse
from app.services.lead_service import DEFAULT_CAPTURE_SUMMARY
from app.utils.exceptions import StoreWriteError

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"

Persist = Callable[[LeadCreate], Awaitable[LeadResponse]]


@dataclass
class SyncAlert:
    """Blocking alert shown when a write fails after the optimistic insert."""

    message: str
    hint: str = ""


def merge_lead(
    leads: list[LeadResponse],
    incoming: LeadResponse,
    *,
    replaces: str | None = None,
) -> list[LeadResponse]:
    """Return a new list with ``incoming`` folded in by id.

    - ``incoming.id`` already present: that entry is refreshed and the
      ``replaces`` placeholder, if any, is dropped.
    - otherwise, a ``replaces`` placeholder is swapped for ``incoming`` in
      place.
    - otherwise ``incoming`` is prepended.
    """
    if any(lead.id == incoming.id for lead in leads):
        return [
            incoming if lead.id == incoming.id else lead
            for lead in leads
            if replaces is None or lead.id != replaces
        ]
    if replaces is not None and any(lead.id == replaces for lead in leads):
        return [incoming if lead.id == replaces else lead for lead in leads]
    return [incoming, *leads]


def optimistic_lead(body: LeadCreate, now_ms: int | None = None) -> LeadResponse:
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    summary = body.chat_summary or (body.notes[0] if body.notes else DEFAULT_CAPTURE_SUMMARY)
    return LeadResponse(
        id=f"{TEMP_ID_PREFIX}{now_ms}",
        name=body.name or "New Prospect",
        phone=body.phone or "N/A",
        email=body.email,
        property_id=body.property_id or "General",
        property_address=body.property_address or "N/A",
        status=body.status,
        created_at=datetime.now(timezone.utc),
        notes=body.notes or [summary],
    )


class LeadBoard:
    def __init__(self, leads: list[LeadResponse] | None = None) -> None:
        self.leads: list[LeadResponse] = list(leads or [])
        self.notifications = 0

    def apply_realtime(self, record: LeadResponse | dict[str, Any]) -> bool:
        """Fold in a pushed INSERT; returns False if the id was already known."""
        lead = record if isinstance(record, LeadResponse) else LeadResponse.model_validate(record)
        known = any(existing.id == lead.id for existing in self.leads)
        self.leads = merge_lead(self.leads, lead)
        if not known:
            self.notifications += 1
        return not known

    async def capture(
        self, body: LeadCreate, persist: Persist, *, silent: bool = False
    ) -> SyncAlert | None:
        """Models the dashboard client's optimistic capture of one lead.

        A failed write leaves the optimistic lead in place and returns an
        alert for the user; nothing is rolled back or retried.
        """
        placeholder = optimistic_lead(body)
        self.leads = [placeholder, *self.leads]
        if not silent:
            self.notifications += 1

        try:
            confirmed = await persist(body)
        except StoreWriteError as e:
            logger.error("Lead not saved to store: %s", e)
            return SyncAlert(
                message=f"CRITICAL DATABASE ERROR: Lead not saved to cloud. Error: {e}",
                hint=e.hint,
            )

        self.leads = merge_lead(self.leads, confirmed, replaces=placeholder.id)
        return None
