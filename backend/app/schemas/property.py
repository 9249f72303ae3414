from __future__ import annotations

import logging
import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

ESTATE_GUARD_PRICE_THRESHOLD = 5_000_000

_NUMBER = re.compile(r"-?\d[\d,]*(?:\.\d+)?|-?\.\d+")


class PropertyCategory(StrEnum):
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    LAND = "Land"


class TransactionType(StrEnum):
    SALE = "Sale"
    RENT = "Rent"
    LEASE = "Lease"


class PropertyStatus(StrEnum):
    ACTIVE = "Active"
    PENDING = "Pending"
    DRAFT = "Draft"


class PropertyTier(StrEnum):
    STANDARD = "Standard"
    ELITE_GATED = "Estate Guard"


def parse_number(value: Any) -> float | None:
    """Pull a number out of loose model output: ``"$1,250,000"``, ``"3 Bed"``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER.search(str(value))
    if not match:
        return None
    try:
        return float(match.group().replace(",", ""))
    except ValueError:
        return None


def tier_for_price(price: float) -> PropertyTier:
    if price > ESTATE_GUARD_PRICE_THRESHOLD:
        return PropertyTier.ELITE_GATED
    return PropertyTier.STANDARD


class KeyStats(BaseModel):
    bedrooms: int | None = None
    bathrooms: float | None = None
    sq_ft: int | None = None
    lot_size: str | None = None
    zoning: str | None = None

    @field_validator("bedrooms", "sq_ft", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int | None:
        number = parse_number(value)
        return int(number) if number is not None else None

    @field_validator("bathrooms", mode="before")
    @classmethod
    def _coerce_float(cls, value: Any) -> float | None:
        return parse_number(value)

    @field_validator("lot_size", "zoning", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)


class ListingDetails(BaseModel):
    address: str = ""
    price: float = 0
    image_url: str | None = None
    video_tour_url: str | None = None
    hero_narrative: str = ""
    key_stats: KeyStats = Field(default_factory=KeyStats)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> float:
        return parse_number(value) or 0

    @field_validator("address", "hero_narrative", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("key_stats", mode="before")
    @classmethod
    def _none_to_stats(cls, value: Any) -> Any:
        return {} if value is None else value


class VisibilityProtocol(BaseModel):
    public_fields: list[str] = Field(default_factory=list)
    gated_fields: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _gated_wins(self) -> VisibilityProtocol:
        overlap = set(self.public_fields) & set(self.gated_fields)
        if overlap:
            logger.warning(
                "Fields listed as both public and gated, treating as gated: %s",
                ", ".join(sorted(overlap)),
            )
            self.public_fields = [f for f in self.public_fields if f not in overlap]
        return self


class AgentNotes(BaseModel):
    motivation: str = ""
    showing_instructions: str = ""

    @field_validator("motivation", "showing_instructions", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)


class PropertyRecord(BaseModel):
    property_id: str
    category: PropertyCategory = PropertyCategory.RESIDENTIAL
    transaction_type: TransactionType = TransactionType.SALE
    status: PropertyStatus = PropertyStatus.ACTIVE
    tier: PropertyTier = PropertyTier.STANDARD
    visibility_protocol: VisibilityProtocol = Field(default_factory=VisibilityProtocol)
    listing_details: ListingDetails = Field(default_factory=ListingDetails)
    agent_notes: AgentNotes = Field(default_factory=AgentNotes)
    deep_data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("visibility_protocol", "listing_details", "agent_notes", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any) -> Any:
        return {} if value is None else value
