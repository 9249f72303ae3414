from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_owner_id, get_owner_llm_provider
from app.llm.base import LLMProvider
from app.schemas.concierge import (
    ChatRequest,
    ChatResponse,
    TranscriptionRequest,
    TranscriptionResponse,
)
from app.services import concierge_service, property_service, settings_service
from app.services.transcription_service import transcribe_audio
from app.utils.exceptions import (
    ChatError,
    ModelsExhaustedError,
    PropertyNotFoundError,
    ProviderError,
    TranscriptionError,
)

router = APIRouter(prefix="/concierge")


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
    llm: LLMProvider = Depends(get_owner_llm_provider),
) -> ChatResponse:
    try:
        record = property_service.get_property(db, owner_id, body.property_id)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    agent_settings = settings_service.get_settings(db, owner_id)
    try:
        reply = await concierge_service.chat_with_guard(body.history, record, agent_settings, llm)
    except ChatError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except (ModelsExhaustedError, ProviderError) as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return ChatResponse(reply=reply)


@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe(
    body: TranscriptionRequest,
    llm: LLMProvider = Depends(get_owner_llm_provider),
) -> TranscriptionResponse:
    try:
        text = await transcribe_audio(body.audio_base64, llm, mime_type=body.mime_type)
    except TranscriptionError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except (ModelsExhaustedError, ProviderError) as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return TranscriptionResponse(text=text)
