from __future__ import annotations

from app.config import settings
from app.llm.base import LLMProvider, parse_model_candidates
from app.utils.exceptions import MissingAPIKeyError

_provider_instances: dict[str, LLMProvider] = {}


def resolve_api_key(passed_key: str | None = None) -> str:
    """Explicit key first, then GOOGLE_API_KEY / VITE_GOOGLE_API_KEY."""
    key = (passed_key or "").strip() or settings.google_api_key.strip()
    if not key:
        raise MissingAPIKeyError(
            "Missing Google API Key. Save one in settings or set GOOGLE_API_KEY."
        )
    return key


def get_llm_provider(api_key: str | None = None) -> LLMProvider:
    key = resolve_api_key(api_key)
    provider = _provider_instances.get(key)
    if provider is None:
        from app.llm.gemini_provider import GeminiProvider

        provider = GeminiProvider(key, parse_model_candidates(settings.gemini_models))
        _provider_instances[key] = provider
    return provider
