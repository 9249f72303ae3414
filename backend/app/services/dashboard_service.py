from __future__ import annotations

from datetime import date, timedelta

from app.schemas.dashboard import DashboardStats, DayCount, StageCount
from app.schemas.lead import LeadResponse, LeadStatus
from app.schemas.property import PropertyRecord, PropertyTier

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Columns charted on the pipeline bar chart
_PIPELINE_CHART = (
    LeadStatus.NEW,
    LeadStatus.QUALIFIED,
    LeadStatus.SHOWING,
    LeadStatus.CLOSED,
)


def compute_dashboard_stats(
    properties: list[PropertyRecord],
    leads: list[LeadResponse],
    today: date | None = None,
) -> DashboardStats:
    today = today or date.today()

    closed = sum(1 for lead in leads if lead.status == LeadStatus.CLOSED)
    conversion = round(closed / len(leads) * 100) if leads else 0

    lead_days = [lead.created_at.date() for lead in leads]
    this_month = sum(1 for d in lead_days if d.year == today.year and d.month == today.month)

    heatmap = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        heatmap.append(
            DayCount(
                name=_DAY_NAMES[day.weekday()],
                date=day.isoformat(),
                leads=sum(1 for d in lead_days if d == day),
            )
        )

    return DashboardStats(
        portfolio_volume=len(properties),
        total_leads=len(leads),
        gated_estates=sum(1 for p in properties if p.tier == PropertyTier.ELITE_GATED),
        closed_deals=closed,
        conversion_rate=conversion,
        leads_this_month=this_month,
        weekly_heatmap=heatmap,
        pipeline=[
            StageCount(name=stage.value, count=sum(1 for lead in leads if lead.status == stage))
            for stage in _PIPELINE_CHART
        ],
    )
