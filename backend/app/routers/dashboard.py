from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_owner_id
from app.schemas.dashboard import DashboardStats
from app.services import lead_service, property_service
from app.services.dashboard_service import compute_dashboard_stats

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(
    owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)
) -> DashboardStats:
    return compute_dashboard_stats(
        property_service.list_properties(db, owner_id),
        lead_service.list_leads(db, owner_id),
    )
