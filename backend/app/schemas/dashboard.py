from __future__ import annotations

from pydantic import BaseModel


class DayCount(BaseModel):
    name: str
    date: str
    leads: int


class StageCount(BaseModel):
    name: str
    count: int


class DashboardStats(BaseModel):
    portfolio_volume: int
    total_leads: int
    gated_estates: int
    closed_deals: int
    conversion_rate: int
    leads_this_month: int
    weekly_heatmap: list[DayCount]
    pipeline: list[StageCount]
