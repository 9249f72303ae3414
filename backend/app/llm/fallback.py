"""Sequential model fallback.

Candidates are tried strictly in order, one billable call at a time. Only
errors the provider classifies as "model unavailable" advance to the next
candidate. Other SDK or transport errors stop the run as ProviderError;
anything else propagates untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from app.llm.base import LLMModel, LLMProvider, ModelCandidate
from app.utils.exceptions import ModelsExhaustedError, ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def diagnose_connection(llm: LLMProvider) -> list[str] | None:
    """Log which models the key can actually reach. Never raises."""
    try:
        logger.info("[Diagnostic] Attempting to list available models...")
        names = await llm.list_available_models()
    except Exception as e:
        logger.error("[Diagnostic] Listing models failed: %s", e)
        return None

    if names:
        logger.info("[Diagnostic] API key has access to: %s", ", ".join(names))
        logger.warning("[Diagnostic] Update GEMINI_MODELS to match one of these.")
    else:
        logger.info("[Diagnostic] No models returned")
    return names


async def execute_with_fallback(
    action: Callable[[LLMModel], Awaitable[T]],
    llm: LLMProvider,
    *,
    candidates: list[ModelCandidate] | None = None,
    system_instruction: str | None = None,
) -> T:
    ordered = list(candidates) if candidates is not None else llm.candidates
    last_error: BaseException | None = None

    for candidate in ordered:
        model = llm.open_model(candidate, system_instruction)
        try:
            return await action(model)
        except Exception as e:
            if not llm.is_model_unavailable(e):
                if isinstance(e, llm.error_types):
                    logger.error(
                        "[%s] Model %s failed: %s", llm.provider_name, candidate.name, e
                    )
                    raise ProviderError(f"{llm.provider_name} request failed: {e}") from e
                raise
            logger.warning(
                "[%s] Model %s (%s) unavailable, trying next: %s",
                llm.provider_name,
                candidate.name,
                candidate.api_version or "default",
                e,
            )
            last_error = e

    await diagnose_connection(llm)

    message = str(last_error) if last_error is not None else "Unknown"
    raise ModelsExhaustedError(
        f"All {llm.provider_name} models failed. Last error: {message}",
        last_error=last_error,
    )
