from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from app.services.proxy_service import fetch_url
from app.utils.exceptions import FetchProxyError

router = APIRouter()


@router.get("/proxy")
async def proxy(url: str | None = None) -> Response:
    """Fetch a listing page server-side for the browser."""
    if not url:
        return JSONResponse(status_code=400, content={"error": "URL is required"})
    try:
        page = await fetch_url(url)
    except FetchProxyError as e:
        return JSONResponse(status_code=e.status_code, content={"error": str(e)})
    return Response(content=page.text, media_type=page.content_type)
