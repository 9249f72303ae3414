from __future__ import annotations

import json
from typing import TYPE_CHECKING

from app.database import commit_or_raise
from app.models.agent_settings import AgentSettingsRecord
from app.schemas.agent_settings import AgentSettings

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def _get_row(db: Session, owner_id: str) -> AgentSettingsRecord | None:
    return (
        db.query(AgentSettingsRecord)
        .filter(AgentSettingsRecord.owner_id == owner_id)
        .first()
    )


def get_settings(db: Session, owner_id: str) -> AgentSettings:
    """Saved settings layered over the defaults; empty columns keep the default."""
    defaults = AgentSettings()
    row = _get_row(db, owner_id)
    if row is None:
        return defaults

    merged = defaults.model_dump()
    for field in AgentSettings.model_fields:
        value = getattr(row, field, None)
        if value is None or value == "":
            continue
        if field == "specialties":
            value = json.loads(value)
        merged[field] = value
    return AgentSettings.model_validate(merged)


def save_settings(db: Session, owner_id: str, agent_settings: AgentSettings) -> AgentSettings:
    row = _get_row(db, owner_id)
    if row is None:
        row = AgentSettingsRecord(owner_id=owner_id)
        db.add(row)

    for field, value in agent_settings.model_dump().items():
        if field == "specialties":
            value = json.dumps(value)
        setattr(row, field, value)

    commit_or_raise(db, "save settings", "agent_settings")
    return get_settings(db, owner_id)
