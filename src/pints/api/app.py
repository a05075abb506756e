# src/pints/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and owns the single compass session for
the lifetime of the process. Event handling lives in `pints.api.routes` and
`pints.compass`.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from pints.core.logging import configure_logging

from .routes import open_session, router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    session = open_session()
    app.state.compass_session = session
    try:
        yield
    finally:
        session.compass.close()


app = FastAPI(title="Pints API", version="0.1.0", lifespan=lifespan)

# CORS (dev-friendly): the compass page is usually served from another local port.
# Configure via env:
# - PINTS_CORS_ORIGINS="http://localhost:8003,http://127.0.0.1:8003"
# - PINTS_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("PINTS_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("PINTS_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = os.getenv("PINTS_CORS_ALLOW_ORIGIN_REGEX", "").strip() or (
    r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local and not cors_origins else ""
)
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(router)
