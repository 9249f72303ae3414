from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

ChatRole = Literal["user", "model"]


@dataclass(frozen=True)
class ModelCandidate:
    name: str
    api_version: str | None = None


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str


def parse_model_candidates(value: str) -> list[ModelCandidate]:
    """Parse ``"name:version,name,..."`` into ordered candidates."""
    candidates: list[ModelCandidate] = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, _, version = item.partition(":")
        candidates.append(ModelCandidate(name=name.strip(), api_version=version.strip() or None))
    return candidates


class LLMModel(ABC):
    """A live handle on one model candidate."""

    candidate: ModelCandidate

    @abstractmethod
    async def generate(self, prompt: str) -> str: ...

    @abstractmethod
    async def generate_with_audio(
        self, audio: bytes, mime_type: str, instruction: str
    ) -> str: ...

    @abstractmethod
    async def chat(self, history: list[ChatMessage], message: str) -> str: ...


class LLMProvider(ABC):
    @abstractmethod
    def open_model(
        self, candidate: ModelCandidate, system_instruction: str | None = None
    ) -> LLMModel: ...

    @abstractmethod
    def is_model_unavailable(self, error: BaseException) -> bool:
        """True when ``error`` means this candidate cannot serve the request."""

    @abstractmethod
    async def list_available_models(self) -> list[str]: ...

    @property
    @abstractmethod
    def candidates(self) -> list[ModelCandidate]: ...

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @property
    @abstractmethod
    def error_types(self) -> tuple[type[BaseException], ...]:
        """Exception types raised by the provider's SDK and transport."""
