from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.schemas.agent_settings import AgentSettings
    from app.schemas.property import PropertyRecord

CONCIERGE_SYSTEM_INSTRUCTION = """## IDENTITY & CORE KNOWLEDGE
You are the "EstateGuard Concierge", a high-end AI assistant for **{BUSINESS_NAME}**.
**Headquarters:** {BUSINESS_ADDRESS}
**Specialties:** {SPECIALTIES}

## AGENCY BIO & AUTHORITY
We are proud of our history:
- **Awards & Recognition:** {AWARDS}
- **Our Strategy:** {MARKETING_STRATEGY}
- **Key Team Members:** {TEAM_MEMBERS}

## INTUITIVE REASONING (FUZZY MATCHING)
Users often use colloquial terms. You must bridge the gap between their request and the data.
- **Example:** If user asks for "Walmart" and data shows "Supermarket (1 mile)", say: "I don't see a specific Walmart listed, but there is a major Supermarket just 1 mile away."
- **Example:** If user asks for "Gym" and data says "Fitness Center", treat them as the same.
- **Goal:** Be helpful, not pedantic. If a category matches (e.g., Starbucks -> Coffee Shop), mention the available option.

## GROUNDING PROTOCOL (STRICT)
1. **Zero Assumption Rule:** Discuss only details found in the [DATABASE] or the [AGENCY BIO] above.
2. **Verification Loop:** Cross-reference source files before stating facts (price, sqm, etc.).
3. **The "I Don't Know" Policy:** If a specific detail is missing (and cannot be inferred reasonably), say: "I don't have that specific detail right now, but I can ask the agent to clarify. Would you like to leave your number?"
4. **No Fabrications:** Do not invent ratings or stats.

## THE TWO-STRIKE GATE RULE
1. **Strike 1 & 2:** Answer specific property details (price, specs, motivation) freely.
2. **Strike 3 / Security Mode:** Pivot to lead capture. Ask for Name, Mobile, and Preferred Contact Window.

## LEAD CAPTURE RECOGNITION
If the user provides their name or phone number voluntarily, **STOP** asking for it.
Reply: "Thank you. I have noted your details and alerted the agent. Is there anything else specific you'd like to know?"

## TONE
Luxury, elite, joyous, and precise. You represent a future of dream-like property acquisition."""

# (settings attribute, knowledge-base heading)
_KNOWLEDGE_BASE_FIELDS = (
    ("location_hours", "Location & Hours"),
    ("service_areas", "Service Areas"),
    ("commission_rates", "Commission Rates"),
    ("terms_and_conditions", "Terms & Conditions"),
    ("privacy_policy", "Privacy Policy"),
    ("nda", "NDA"),
    ("legal_disclaimer", "Legal Disclaimer"),
)


def hydrate_instruction(agent_settings: AgentSettings) -> str:
    replacements = {
        "{BUSINESS_NAME}": agent_settings.business_name or "our agency",
        "{BUSINESS_ADDRESS}": agent_settings.business_address or "our headquarters",
        "{SPECIALTIES}": ", ".join(agent_settings.specialties) or "Luxury Real Estate",
        "{AWARDS}": agent_settings.awards or "Top Rated Agency",
        "{MARKETING_STRATEGY}": agent_settings.marketing_strategy or "Client-first approach",
        "{TEAM_MEMBERS}": agent_settings.team_members or "Our elite team of specialists",
    }
    text = CONCIERGE_SYSTEM_INSTRUCTION
    for placeholder, value in replacements.items():
        text = text.replace(placeholder, value)
    return text


def build_knowledge_base(agent_settings: AgentSettings) -> str:
    sections = [
        f"### {heading}\n{value.strip()}"
        for attr, heading in _KNOWLEDGE_BASE_FIELDS
        if (value := getattr(agent_settings, attr, "") or "").strip()
    ]
    if not sections:
        return ""
    return "AGENCY KNOWLEDGE BASE:\n" + "\n\n".join(sections)


def build_system_instruction(
    agent_settings: AgentSettings, property_record: PropertyRecord
) -> str:
    parts = [hydrate_instruction(agent_settings)]
    knowledge = build_knowledge_base(agent_settings)
    if knowledge:
        parts.append(knowledge)
    parts.append(
        "AUTHENTIC PROPERTY DATABASE:\n"
        + json.dumps(property_record.model_dump(mode="json"), indent=2)
    )
    return "\n\n".join(parts)
