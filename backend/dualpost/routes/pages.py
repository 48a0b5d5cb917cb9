"""
DualPost Backend — Root Page Route
===================================

What:  Serves index.html for GET /.
Why:   The bundled page is a small client for both post surfaces. Other assets
       in the same directory are served by the StaticFiles mount in main.py.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
async def index(request: Request) -> FileResponse:
    """Serve the homepage from the configured static directory."""
    index_path = Path(request.app.state.settings.static_dir) / "index.html"
    logger.debug("Serving %s", index_path)
    return FileResponse(path=str(index_path), media_type="text/html")
