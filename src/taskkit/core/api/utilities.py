"""Utilities for serving taskkit applications."""

from __future__ import annotations

import os
from typing import Any

import uvicorn
from fastapi import FastAPI


def run_app(
    app: FastAPI | str,
    *,
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
    **uvicorn_kwargs: Any,
) -> None:
    """Serve an app (or an ``module:attribute`` import string) with uvicorn.

    Host and port default to the ``HOST`` and ``PORT`` environment variables.
    """
    if reload and not isinstance(app, str):
        raise ValueError("reload=True requires the app as an import string, e.g. 'module:app'")

    uvicorn.run(
        app,
        host=host or os.getenv("HOST", "127.0.0.1"),
        port=port or int(os.getenv("PORT", "8000")),
        reload=reload,
        log_config=None,  # keep the structlog configuration
        **uvicorn_kwargs,
    )
