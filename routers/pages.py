"""Static front end for the calculator."""
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

# Shipped as package data of ``routers`` (see pyproject.toml)
INDEX_PAGE = Path(__file__).resolve().parent / "static" / "index.html"

router = APIRouter(tags=["Pages"])


@lru_cache(maxsize=1)
def load_index_page() -> str:
    return INDEX_PAGE.read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index():
    """Serve the calculator page verbatim."""
    return HTMLResponse(load_index_page())
