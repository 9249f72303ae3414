from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_owner_id, store_write_http_error
from app.schemas.agent_settings import AgentSettings, AgentSettingsResponse
from app.services import settings_service
from app.utils.exceptions import StoreWriteError

router = APIRouter(prefix="/settings")

MASK_PREFIX = "*" * 8


@router.get("", response_model=AgentSettingsResponse)
def read_settings(
    owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)
) -> AgentSettingsResponse:
    return AgentSettingsResponse.from_settings(settings_service.get_settings(db, owner_id))


@router.put("", response_model=AgentSettingsResponse)
def write_settings(
    body: AgentSettings,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> AgentSettingsResponse:
    if body.api_key.startswith(MASK_PREFIX):
        # Echoed mask from GET: keep the stored key
        current = settings_service.get_settings(db, owner_id)
        body = body.model_copy(update={"api_key": current.api_key})
    try:
        saved = settings_service.save_settings(db, owner_id, body)
    except StoreWriteError as e:
        raise store_write_http_error(e) from e
    return AgentSettingsResponse.from_settings(saved)
