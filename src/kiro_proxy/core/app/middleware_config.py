from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware


def configure_middleware(app: FastAPI) -> None:
    """Configure middleware for the application.

    Args:
        app: The FastAPI application
    """
    # Browsers send no credentials with "*" origins, so credentials stay off
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
