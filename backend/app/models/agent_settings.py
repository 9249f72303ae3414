from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class AgentSettingsRecord(Base):
    __tablename__ = "agent_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    business_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    business_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    primary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    concierge_intro: Mapped[str | None] = mapped_column(Text, nullable=True)
    api_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    high_security_mode: Mapped[bool] = mapped_column(Boolean, default=True)
    subscription_tier: Mapped[str | None] = mapped_column(String(50), nullable=True)
    agent_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    specialties: Mapped[str | None] = mapped_column(Text, nullable=True)

    awards: Mapped[str | None] = mapped_column(Text, nullable=True)
    marketing_strategy: Mapped[str | None] = mapped_column(Text, nullable=True)
    team_members: Mapped[str | None] = mapped_column(Text, nullable=True)
    terms_and_conditions: Mapped[str | None] = mapped_column(Text, nullable=True)
    privacy_policy: Mapped[str | None] = mapped_column(Text, nullable=True)
    nda: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_hours: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_areas: Mapped[str | None] = mapped_column(Text, nullable=True)
    commission_rates: Mapped[str | None] = mapped_column(Text, nullable=True)
    legal_disclaimer: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), onupdate=func.now()
    )
