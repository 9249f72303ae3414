from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_SPECIALTIES = ["Luxury Waterfront", "Commercial High-Rise", "Exclusive Land"]


class AgentSettings(BaseModel):
    business_name: str = "EstateGuard AI"
    business_address: str = "77 Ocean Drive, Miami FL"
    contact_email: str = "hq@estateguard.ai"
    contact_phone: str = "+1 (800) ESTATE-AI"
    primary_color: str = "#d4af37"
    concierge_intro: str = "Ask our happy assistant about any of our properties 24/7"
    api_key: str = ""
    high_security_mode: bool = True
    subscription_tier: str = "Enterprise"
    agent_count: int = 12
    specialties: list[str] = Field(default_factory=lambda: list(DEFAULT_SPECIALTIES))

    # Knowledge base, fed verbatim to the concierge
    awards: str = ""
    marketing_strategy: str = ""
    team_members: str = ""
    terms_and_conditions: str = ""
    privacy_policy: str = ""
    nda: str = ""
    location_hours: str = ""
    service_areas: str = ""
    commission_rates: str = ""
    legal_disclaimer: str = ""

    model_config = {"from_attributes": True}

    @field_validator("specialties", mode="before")
    @classmethod
    def _parse_specialties(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                return json.loads(value)
            return [s.strip() for s in value.split(",") if s.strip()]
        return value


class AgentSettingsResponse(AgentSettings):
    """Settings as shown to the dashboard; the API key is masked."""

    has_api_key: bool = False

    @classmethod
    def from_settings(cls, agent_settings: AgentSettings) -> AgentSettingsResponse:
        data = agent_settings.model_dump()
        key = data.pop("api_key")
        masked = f"{'*' * 8}{key[-4:]}" if key else ""
        return cls(**data, api_key=masked, has_api_key=bool(key))
