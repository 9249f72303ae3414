"""Tests for optimistic lead capture and realtime reconciliation."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from app.schemas.lead import LeadCreate, LeadResponse
from app.services.lead_board import LeadBoard, merge_lead, optimistic_lead
from app.utils.exceptions import StoreWriteError


def _lead(lead_id: str, name: str = "Ava") -> LeadResponse:
    return LeadResponse(id=lead_id, name=name, phone="555-0100", created_at=datetime.now(timezone.utc))


class TestMergeLead:
    def test_prepends_new_lead(self):
        merged = merge_lead([_lead("a")], _lead("b"))
        assert [lead.id for lead in merged] == ["b", "a"]

    def test_refreshes_known_id(self):
        merged = merge_lead([_lead("a", "Old")], _lead("a", "New"))
        assert [(lead.id, lead.name) for lead in merged] == [("a", "New")]

    def test_replaces_placeholder_in_place(self):
        merged = merge_lead([_lead("x"), _lead("temp-1"), _lead("y")], _lead("r"), replaces="temp-1")
        assert [lead.id for lead in merged] == ["x", "r", "y"]

    def test_drops_placeholder_when_real_id_already_present(self):
        merged = merge_lead([_lead("r"), _lead("temp-1")], _lead("r"), replaces="temp-1")
        assert [lead.id for lead in merged] == ["r"]

    def test_idempotent(self):
        once = merge_lead([_lead("a")], _lead("r"))
        assert [lead.id for lead in merge_lead(once, _lead("r"))] == ["r", "a"]


class TestOptimisticLead:
    def test_placeholder_fields(self):
        lead = optimistic_lead(LeadCreate(chat_summary="Cash buyer"), now_ms=1700000000000)
        assert lead.id == "temp-1700000000000"
        assert lead.name == "New Prospect"
        assert lead.notes == ["Cash buyer"]


class TestLeadBoard:
    @pytest.mark.asyncio
    async def test_ack_replaces_placeholder(self):
        board = LeadBoard([_lead("old")])

        async def persist(body):
            return _lead("r", body.name)

        assert await board.capture(LeadCreate(name="Ava"), persist) is None
        assert [lead.id for lead in board.leads] == ["r", "old"]
        assert board.notifications == 1

    @pytest.mark.asyncio
    async def test_realtime_event_before_ack_yields_one_lead(self):
        board = LeadBoard()
        confirmed = _lead("r")

        async def persist(body):
            # The INSERT event lands while the write is still in flight
            assert board.apply_realtime(confirmed.model_dump(mode="json")) is True
            await asyncio.sleep(0)
            return confirmed

        await board.capture(LeadCreate(name="Ava"), persist)

        assert [lead.id for lead in board.leads] == ["r"]

    @pytest.mark.asyncio
    async def test_realtime_event_after_ack_is_ignored(self):
        board = LeadBoard()
        confirmed = _lead("r")

        async def persist(body):
            return confirmed

        await board.capture(LeadCreate(), persist)
        assert board.apply_realtime(confirmed) is False
        assert [lead.id for lead in board.leads] == ["r"]
        assert board.notifications == 1

    @pytest.mark.asyncio
    async def test_failed_write_keeps_optimistic_lead(self):
        board = LeadBoard()

        async def persist(body):
            raise StoreWriteError("Failed to save lead: no such column", hint="run the migration")

        alert = await board.capture(LeadCreate(name="Ava"), persist)

        assert alert is not None
        assert alert.message.startswith("CRITICAL DATABASE ERROR")
        assert alert.hint == "run the migration"
        assert len(board.leads) == 1
        assert board.leads[0].id.startswith("temp-")

    @pytest.mark.asyncio
    async def test_silent_capture_does_not_notify(self):
        board = LeadBoard()

        async def persist(body):
            return _lead("r")

        await board.capture(LeadCreate(), persist, silent=True)
        assert board.notifications == 0
