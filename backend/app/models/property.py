from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Property(Base):
    """A portfolio listing. ``data_json`` holds the full PropertyRecord."""

    __tablename__ = "properties"
    __table_args__ = (
        UniqueConstraint("owner_id", "property_id", name="uq_properties_owner_property"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    property_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(20), default="Residential")
    transaction_type: Mapped[str] = mapped_column(String(20), default="Sale")
    status: Mapped[str] = mapped_column(String(20), default="Active")
    tier: Mapped[str] = mapped_column(String(20), default="Standard")
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    data_json: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), onupdate=func.now()
    )
