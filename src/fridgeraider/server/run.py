"""Launch the FridgeRaider ASGI application under uvicorn."""

from __future__ import annotations

import os
from typing import Optional

import uvicorn

APP_PATH = "fridgeraider.server.app:app"


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False,
) -> None:
    """Run uvicorn; host and port fall back to ``FRIDGERAIDER_SERVER_HOST``/``_PORT``."""

    uvicorn.run(
        APP_PATH,
        host=host or os.environ.get("FRIDGERAIDER_SERVER_HOST", "127.0.0.1"),
        port=port or int(os.environ.get("FRIDGERAIDER_SERVER_PORT", "8000")),
        reload=reload,
    )
