from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "model", "assistant"]
    text: str


class ChatRequest(BaseModel):
    property_id: str
    history: list[ChatTurn] = Field(min_length=1)


class ChatResponse(BaseModel):
    reply: str


class TranscriptionRequest(BaseModel):
    audio_base64: str = Field(min_length=1)
    mime_type: str = "audio/mp3"


class TranscriptionResponse(BaseModel):
    text: str
