"""Turn free text or a listing URL into a PropertyRecord."""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.config import settings
from app.llm.fallback import execute_with_fallback
from app.llm.prompts.extraction import (
    SCRAPER_SYSTEM_INSTRUCTION,
    URL_ONLY_NARRATIVE,
    build_extraction_prompt,
)
from app.schemas.extraction import ExtractionResult
from app.schemas.property import PropertyRecord, parse_number, tier_for_price
from app.services.proxy_service import FetchedPage, fetch_url
from app.utils.exceptions import (
    ExtractionError,
    MalformedResponseError,
    ModelsExhaustedError,
    ProviderError,
)
from app.utils.json_extraction import extract_json

if TYPE_CHECKING:
    from app.llm.base import LLMModel, LLMProvider

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"^https?://\S+$")

Fetcher = Callable[[str], Awaitable[FetchedPage]]


def is_url(value: str) -> bool:
    return bool(_URL_PATTERN.match(value.strip()))


def generate_property_id() -> str:
    return f"EG-{uuid.uuid4().hex[:6].upper()}"


def _apply_defaults(data: dict[str, Any]) -> dict[str, Any]:
    if not data.get("property_id"):
        data["property_id"] = generate_property_id()
    if not data.get("status"):
        data["status"] = "Active"
    if not data.get("tier"):
        details = data.get("listing_details")
        if not isinstance(details, dict):
            details = {}
        data["tier"] = tier_for_price(parse_number(details.get("price")) or 0).value
    return data


def _blank_unverified_stats(record: PropertyRecord) -> PropertyRecord:
    """URL-only runs have no evidence for narrative, price or stats."""
    details = record.listing_details
    details.hero_narrative = URL_ONLY_NARRATIVE
    details.price = 0
    details.key_stats.bedrooms = None
    details.key_stats.bathrooms = None
    details.key_stats.sq_ft = None
    return record


async def _prepare_input(input_text: str, fetcher: Fetcher) -> tuple[str, str, str]:
    """Return ``(source_text, processing_note, source)`` for the prompt."""
    text = input_text.strip()
    if not is_url(text):
        return text, "", "text"

    logger.info("[Ingestion] Input is URL. Routing through proxy...")
    try:
        page = await fetcher(text)
    except Exception as e:
        logger.warning("[Ingestion] Proxy failed, falling back to URL-only analysis: %s", e)
        return (
            text,
            "(Note: Live scrape failed. Data inferred from URL structure only.)",
            "url_only",
        )

    scraped = page.text[: settings.scrape_max_chars]
    logger.info("[Ingestion] URL scraped successfully. Length: %d", len(scraped))
    return scraped, f"(Analysis based on content scraped from URL: {text})", "url"


async def parse_property_data(
    input_text: str,
    llm: LLMProvider,
    *,
    fetcher: Fetcher = fetch_url,
) -> ExtractionResult:
    source_text, note, source = await _prepare_input(input_text, fetcher)
    prompt = build_extraction_prompt(source_text, note)

    async def _extract(model: LLMModel) -> dict[str, Any]:
        raw_text = await model.generate(prompt)
        return extract_json(raw_text)

    try:
        data = await execute_with_fallback(
            _extract, llm, system_instruction=SCRAPER_SYSTEM_INSTRUCTION
        )
        record = PropertyRecord.model_validate(_apply_defaults(data))
    except (ModelsExhaustedError, ProviderError, MalformedResponseError, ValidationError) as e:
        logger.exception("Extraction failed for %s input", source)
        raise ExtractionError(f"Extraction failed: {e}") from e

    low_confidence = source == "url_only"
    if low_confidence:
        record = _blank_unverified_stats(record)

    return ExtractionResult(
        record=record,
        source=source,
        low_confidence=low_confidence,
        processing_note=note,
    )
