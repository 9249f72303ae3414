from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket
from sqlalchemy.orm import Session, sessionmaker

from app.database import get_db, get_session_factory
from app.dependencies import get_owner_id, store_write_http_error
from app.schemas.lead import LeadCreate, LeadNote, LeadResponse, LeadUpdate
from app.services import lead_service
from app.services.lead_board import LeadBoard
from app.services.realtime import change_feed
from app.utils.exceptions import (
    InvalidTransitionError,
    LeadNotFoundError,
    StoreWriteError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads")


@router.get("", response_model=list[LeadResponse])
def list_leads(
    owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)
) -> list[LeadResponse]:
    return lead_service.list_leads(db, owner_id)


@router.post("", response_model=LeadResponse, status_code=201)
async def capture_lead(
    body: LeadCreate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> LeadResponse:
    try:
        return lead_service.create_lead(db, owner_id, body)
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.get("/{lead_id}", response_model=LeadResponse)
def get_lead(
    lead_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> LeadResponse:
    try:
        return lead_service.get_lead(db, owner_id, lead_id)
    except LeadNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.patch("/{lead_id}", response_model=LeadResponse)
def update_lead(
    lead_id: str,
    body: LeadUpdate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> LeadResponse:
    try:
        return lead_service.update_lead(
            db, owner_id, lead_id, body.model_dump(exclude_unset=True)
        )
    except LeadNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.post("/{lead_id}/advance", response_model=LeadResponse)
def advance_lead(
    lead_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> LeadResponse:
    try:
        return lead_service.advance_lead(db, owner_id, lead_id)
    except LeadNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.post("/{lead_id}/notes", response_model=LeadResponse)
def add_note(
    lead_id: str,
    body: LeadNote,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> LeadResponse:
    try:
        return lead_service.add_note(db, owner_id, lead_id, body.text)
    except LeadNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.delete("/{lead_id}")
def delete_lead(
    lead_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> dict:
    try:
        lead_service.delete_lead(db, owner_id, lead_id)
        return {"message": "Lead deleted"}
    except LeadNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.websocket("/live")
async def lead_stream(
    websocket: WebSocket, session_factory: sessionmaker = Depends(get_session_factory)
) -> None:
    """Push a snapshot, then every new lead for the connected owner."""
    owner_id = websocket.headers.get("x-user-id") or websocket.query_params.get("user_id")
    if not owner_id:
        await websocket.close(code=1008)
        return

    await websocket.accept()
    # Subscribe before the snapshot so nothing inserted in between is missed
    async with change_feed.subscribe("leads", owner_id) as queue:
        with session_factory() as db:
            board = LeadBoard(lead_service.list_leads(db, owner_id))
        await websocket.send_json(
            {"type": "snapshot", "leads": [lead.model_dump(mode="json") for lead in board.leads]}
        )

        while True:
            next_event = asyncio.ensure_future(queue.get())
            next_message = asyncio.ensure_future(websocket.receive())
            done, pending = await asyncio.wait(
                {next_event, next_message}, return_when=asyncio.FIRST_COMPLETED
            )
            for task in pending:
                task.cancel()

            if next_message in done:
                if next_message.result()["type"] == "websocket.disconnect":
                    logger.info("Lead stream closed for owner %s", owner_id)
                    return
            if next_event in done:
                event = next_event.result()
                if board.apply_realtime(event.record):
                    await websocket.send_json({"type": "insert", "lead": event.record})
