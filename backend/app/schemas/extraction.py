from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.property import PropertyRecord


class ExtractionRequest(BaseModel):
    input: str = Field(min_length=1)


class ExtractionResult(BaseModel):
    record: PropertyRecord
    source: Literal["text", "url", "url_only"] = "text"
    low_confidence: bool = False
    processing_note: str = ""
