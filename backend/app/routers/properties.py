from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_owner_id, get_owner_llm_provider, store_write_http_error
from app.llm.base import LLMProvider
from app.schemas.extraction import ExtractionRequest, ExtractionResult
from app.schemas.property import PropertyRecord
from app.services import extraction_service, property_service, settings_service
from app.utils.exceptions import (
    DuplicatePropertyError,
    ExtractionError,
    PropertyNotFoundError,
    StoreWriteError,
)

router = APIRouter(prefix="/properties")


@router.get("", response_model=list[PropertyRecord])
def list_properties(
    q: str | None = None,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> list[PropertyRecord]:
    return property_service.list_properties(db, owner_id, search=q)


@router.post("/extract", response_model=ExtractionResult)
async def extract_property(
    body: ExtractionRequest,
    llm: LLMProvider = Depends(get_owner_llm_provider),
) -> ExtractionResult:
    try:
        return await extraction_service.parse_property_data(body.input, llm)
    except ExtractionError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.post("", response_model=PropertyRecord, status_code=201)
def create_property(
    body: PropertyRecord,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> PropertyRecord:
    try:
        return property_service.create_property(db, owner_id, body)
    except DuplicatePropertyError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.get("/{property_id}", response_model=PropertyRecord)
def get_property(
    property_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> PropertyRecord:
    try:
        return property_service.get_property(db, owner_id, property_id)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("/{property_id}/public", response_model=PropertyRecord)
def get_public_property(
    property_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> PropertyRecord:
    try:
        record = property_service.get_property(db, owner_id, property_id)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    agent_settings = settings_service.get_settings(db, owner_id)
    return property_service.public_view(record, agent_settings.high_security_mode)


@router.put("/{property_id}", response_model=PropertyRecord)
def update_property(
    property_id: str,
    body: PropertyRecord,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> PropertyRecord:
    try:
        return property_service.update_property(db, owner_id, property_id, body)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e


@router.delete("/{property_id}")
def delete_property(
    property_id: str,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> dict:
    try:
        property_service.delete_property(db, owner_id, property_id)
        return {"message": "Property deleted"}
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreWriteError as e:
        raise store_write_http_error(e) from e
