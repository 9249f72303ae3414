from fastapi import APIRouter

from app.config import settings
from app.llm.base import parse_model_candidates

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "llm_provider": "gemini",
        "models": [c.name for c in parse_model_candidates(settings.gemini_models)],
        "api_key_configured": bool(settings.google_api_key),
    }
