"""Gemini provider built on the google-genai SDK."""

from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.config import settings
from app.llm.base import ChatMessage, LLMModel, LLMProvider, ModelCandidate

logger = logging.getLogger(__name__)

# HTTP codes Gemini returns when a model id or api version cannot serve us
UNAVAILABLE_CODES = frozenset({400, 404})


class GeminiModel(LLMModel):
    def __init__(
        self,
        client: genai.Client,
        candidate: ModelCandidate,
        system_instruction: str | None = None,
    ) -> None:
        self._client = client
        self.candidate = candidate
        self._config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=settings.llm_temperature,
        )

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.candidate.name,
            contents=prompt,
            config=self._config,
        )
        return response.text or ""

    async def generate_with_audio(
        self, audio: bytes, mime_type: str, instruction: str
    ) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.candidate.name,
            contents=[
                types.Part.from_bytes(data=audio, mime_type=mime_type),
                instruction,
            ],
            config=self._config,
        )
        return response.text or ""

    async def chat(self, history: list[ChatMessage], message: str) -> str:
        session = self._client.aio.chats.create(
            model=self.candidate.name,
            config=self._config,
            history=[
                types.Content(role=turn.role, parts=[types.Part.from_text(text=turn.text)])
                for turn in history
            ],
        )
        response = await session.send_message(message)
        return response.text or ""


class GeminiProvider(LLMProvider):
    def __init__(self, api_key: str, candidates: list[ModelCandidate]) -> None:
        self._api_key = api_key
        self._candidates = list(candidates)
        self._clients: dict[str | None, genai.Client] = {}

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def candidates(self) -> list[ModelCandidate]:
        return list(self._candidates)

    @property
    def error_types(self) -> tuple[type[BaseException], ...]:
        return (genai_errors.APIError, httpx.HTTPError)

    def _client_for(self, api_version: str | None) -> genai.Client:
        client = self._clients.get(api_version)
        if client is None:
            client = genai.Client(
                api_key=self._api_key,
                http_options=types.HttpOptions(
                    api_version=api_version,
                    timeout=int(settings.llm_timeout_seconds * 1000),
                ),
            )
            self._clients[api_version] = client
        return client

    def open_model(
        self, candidate: ModelCandidate, system_instruction: str | None = None
    ) -> GeminiModel:
        return GeminiModel(
            self._client_for(candidate.api_version), candidate, system_instruction
        )

    def is_model_unavailable(self, error: BaseException) -> bool:
        return (
            isinstance(error, genai_errors.ClientError)
            and error.code in UNAVAILABLE_CODES
        )

    async def list_available_models(self) -> list[str]:
        client = self._client_for("v1beta")
        names: list[str] = []
        async for model in await client.aio.models.list():
            if model.name:
                names.append(model.name.removeprefix("models/"))
        return names
