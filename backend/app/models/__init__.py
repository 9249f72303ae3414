from app.models.agent_settings import AgentSettingsRecord
from app.models.lead import Lead
from app.models.property import Property

__all__ = [
    "AgentSettingsRecord",
    "Lead",
    "Property",
]
