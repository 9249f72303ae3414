"""Tests for per-owner agent settings."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.schemas.agent_settings import AgentSettings, AgentSettingsResponse
from app.services import settings_service

OWNER = "agent-1"


class TestAgentSettings:
    def test_defaults_when_nothing_saved(self, db: Session):
        loaded = settings_service.get_settings(db, OWNER)
        assert loaded.business_name == "EstateGuard AI"
        assert loaded.high_security_mode is True
        assert loaded.specialties == ["Luxury Waterfront", "Commercial High-Rise", "Exclusive Land"]

    def test_save_and_reload(self, db: Session):
        saved = settings_service.save_settings(
            db,
            OWNER,
            AgentSettings(
                business_name="Harbor Realty",
                high_security_mode=False,
                specialties=["Condos"],
                commission_rates="2.5%",
            ),
        )
        assert saved.business_name == "Harbor Realty"
        assert saved.high_security_mode is False
        assert saved.specialties == ["Condos"]
        assert settings_service.get_settings(db, OWNER).commission_rates == "2.5%"

    def test_blank_saved_value_keeps_default(self, db: Session):
        settings_service.save_settings(db, OWNER, AgentSettings(business_name=""))
        assert settings_service.get_settings(db, OWNER).business_name == "EstateGuard AI"

    def test_upsert_single_row(self, db: Session):
        settings_service.save_settings(db, OWNER, AgentSettings(agent_count=3))
        settings_service.save_settings(db, OWNER, AgentSettings(agent_count=5))
        assert settings_service.get_settings(db, OWNER).agent_count == 5

    def test_specialties_from_comma_text(self):
        assert AgentSettings(specialties="Land, Farms ,").specialties == ["Land", "Farms"]
        assert AgentSettings(specialties='["Land"]').specialties == ["Land"]


class TestMaskedResponse:
    def test_key_masked(self):
        response = AgentSettingsResponse.from_settings(AgentSettings(api_key="AIzaSecret1234"))
        assert response.api_key == "********1234"
        assert response.has_api_key is True

    def test_no_key(self):
        response = AgentSettingsResponse.from_settings(AgentSettings())
        assert response.api_key == ""
        assert response.has_api_key is False
