from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING

from app.llm.fallback import execute_with_fallback
from app.utils.exceptions import TranscriptionError

if TYPE_CHECKING:
    from app.llm.base import LLMModel, LLMProvider

TRANSCRIPTION_INSTRUCTION = (
    "STRICT TRANSCRIPTION: Convert this voice note to text without additions."
)


def _decode_audio(audio_base64: str) -> bytes:
    # Browsers hand over data URLs; keep only the payload
    payload = audio_base64.split(",", 1)[1] if audio_base64.startswith("data:") else audio_base64
    try:
        audio = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TranscriptionError(f"Audio is not valid base64: {e}") from e
    if not audio:
        raise TranscriptionError("Audio payload is empty")
    return audio


async def transcribe_audio(
    audio_base64: str, llm: LLMProvider, *, mime_type: str = "audio/mp3"
) -> str:
    audio = _decode_audio(audio_base64)

    async def _transcribe(model: LLMModel) -> str:
        text = await model.generate_with_audio(audio, mime_type, TRANSCRIPTION_INSTRUCTION)
        return text or ""

    return await execute_with_fallback(_transcribe, llm)
