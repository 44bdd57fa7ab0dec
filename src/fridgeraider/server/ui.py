"""Single-page web UI for FridgeRaider."""

from __future__ import annotations

import json

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from fridgeraider.server.templates import load as load_template
from fridgeraider.state.views import PLAN_DAY_CHOICES

WEB_APP_PAGE = load_template("webui.html").replace(
    "__PLAN_DAY_CHOICES__", json.dumps(list(PLAN_DAY_CHOICES))
)

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def ui_home() -> str:
    """Serve the FridgeRaider SPA."""

    return WEB_APP_PAGE
