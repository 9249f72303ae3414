from __future__ import annotations

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.llm.base import LLMProvider
from app.llm.factory import get_llm_provider
from app.services import settings_service
from app.utils.exceptions import MissingAPIKeyError, StoreWriteError


def get_owner_id(x_user_id: str | None = Header(default=None)) -> str:
    """Owning user id, set by the auth layer in front of this service."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def get_owner_llm_provider(
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> LLMProvider:
    agent_settings = settings_service.get_settings(db, owner_id)
    try:
        return get_llm_provider(agent_settings.api_key or None)
    except MissingAPIKeyError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def store_write_http_error(error: StoreWriteError) -> HTTPException:
    return HTTPException(
        status_code=500, detail={"message": str(error), "hint": error.hint}
    )
