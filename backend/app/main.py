from __future__ import annotations

from collections.abc import AsyncGenerator  # noqa: TC003
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables
from app.routers import (
    agent_settings,
    concierge,
    dashboard,
    health,
    leads,
    properties,
    proxy,
)
from app.utils.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level)
    # Import models so Base.metadata knows about them
    import app.models  # noqa: F401

    create_tables()
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(properties.router, prefix=settings.api_prefix, tags=["properties"])
app.include_router(leads.router, prefix=settings.api_prefix, tags=["leads"])
app.include_router(agent_settings.router, prefix=settings.api_prefix, tags=["settings"])
app.include_router(concierge.router, prefix=settings.api_prefix, tags=["concierge"])
app.include_router(dashboard.router, prefix=settings.api_prefix, tags=["dashboard"])
app.include_router(proxy.router, prefix="/api", tags=["proxy"])
