from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    """Serve the single-page control panel."""
    return HTMLResponse((STATIC_DIR / "index.html").read_text(encoding="utf-8"))
