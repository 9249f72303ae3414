from __future__ import annotations

import json
from typing import TYPE_CHECKING

from app.database import commit_or_raise
from app.models.property import Property
from app.schemas.property import AgentNotes, KeyStats, PropertyRecord
from app.utils.exceptions import DuplicatePropertyError, PropertyNotFoundError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

# Blank values for listing keys outside key_stats that can be gated
_GATED_DETAIL_BLANKS = {
    "address": "",
    "price": 0,
    "image_url": None,
    "video_tour_url": None,
    "hero_narrative": "",
}


def to_record(row: Property) -> PropertyRecord:
    return PropertyRecord.model_validate(json.loads(row.data_json))


def _apply_record(row: Property, record: PropertyRecord) -> None:
    row.category = record.category.value
    row.transaction_type = record.transaction_type.value
    row.status = record.status.value
    row.tier = record.tier.value
    row.address = record.listing_details.address
    row.price = record.listing_details.price
    row.data_json = record.model_dump_json()


def _get_row(db: Session, owner_id: str, property_id: str) -> Property:
    row = (
        db.query(Property)
        .filter(Property.owner_id == owner_id, Property.property_id == property_id)
        .first()
    )
    if not row:
        raise PropertyNotFoundError(f"Property {property_id} not found")
    return row


def list_properties(
    db: Session, owner_id: str, search: str | None = None
) -> list[PropertyRecord]:
    rows = (
        db.query(Property)
        .filter(Property.owner_id == owner_id)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .all()
    )
    records = [to_record(row) for row in rows]
    if search:
        records = [r for r in records if matches_search(r, search)]
    return records


def matches_search(record: PropertyRecord, term: str) -> bool:
    """Portfolio search: address, price digits, or status."""
    needle = term.strip().lower()
    price = record.listing_details.price
    price_text = str(int(price)) if float(price).is_integer() else str(price)
    return (
        needle in record.listing_details.address.lower()
        or needle in price_text
        or needle in record.status.value.lower()
    )


def get_property(db: Session, owner_id: str, property_id: str) -> PropertyRecord:
    return to_record(_get_row(db, owner_id, property_id))


def create_property(db: Session, owner_id: str, record: PropertyRecord) -> PropertyRecord:
    exists = (
        db.query(Property.id)
        .filter(Property.owner_id == owner_id, Property.property_id == record.property_id)
        .first()
    )
    if exists:
        raise DuplicatePropertyError(f"Property {record.property_id} already exists")

    row = Property(owner_id=owner_id, property_id=record.property_id)
    _apply_record(row, record)
    db.add(row)
    commit_or_raise(db, "save property", "properties")
    db.refresh(row)
    return to_record(row)


def update_property(
    db: Session, owner_id: str, property_id: str, record: PropertyRecord
) -> PropertyRecord:
    row = _get_row(db, owner_id, property_id)
    if record.property_id != property_id:
        record = record.model_copy(update={"property_id": property_id})
    _apply_record(row, record)
    commit_or_raise(db, "save property changes", "properties")
    db.refresh(row)
    return to_record(row)


def delete_property(db: Session, owner_id: str, property_id: str) -> bool:
    row = _get_row(db, owner_id, property_id)
    db.delete(row)
    commit_or_raise(db, "delete property", "properties")
    return True


def public_view(record: PropertyRecord, high_security_mode: bool) -> PropertyRecord:
    """Withhold gated fields when high security mode is on.

    With the mode off the visibility protocol is advisory and the record is
    returned unchanged.
    """
    if not high_security_mode:
        return record

    gated = set(record.visibility_protocol.gated_fields)
    if not gated:
        return record

    redacted = record.model_copy(deep=True)
    details = redacted.listing_details
    for name in gated:
        if name in _GATED_DETAIL_BLANKS:
            setattr(details, name, _GATED_DETAIL_BLANKS[name])
        elif name == "key_stats":
            details.key_stats = KeyStats()
        elif name in KeyStats.model_fields:
            setattr(details.key_stats, name, None)
        elif name in ("motivation", "showing_instructions"):
            setattr(redacted.agent_notes, name, "")
        elif name == "agent_notes":
            redacted.agent_notes = AgentNotes()
        redacted.deep_data.pop(name, None)
    return redacted
