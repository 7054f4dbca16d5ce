from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)-7s %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

from core.errors import RenderError
from core.json_response import JsonRenderer, render_json
from core.schemas import RenderPayload
from core.settings import RenderSettings, load_settings

render_settings = load_settings()
json_renderer = JsonRenderer(render_settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"[STARTUP] render settings: {render_settings.as_dict()}")
    yield


app = FastAPI(title="JSON Render API", version="1.0.0", lifespan=lifespan)


def get_settings() -> RenderSettings:
    return render_settings


def get_renderer() -> JsonRenderer:
    return json_renderer


@app.exception_handler(RenderError)
async def render_error_handler(request: Request, exc: RenderError):
    if exc.status_code >= 500:
        logger.error(f"[RENDER] {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"[RENDER] {request.url.path} rejected: {exc.message}")
    return JSONResponse(
        {"error": exc.message, "detail": exc.detail},
        status_code=exc.status_code,
    )


# ── Render endpoints ─────────────────────────────────────────


@app.get("/api/health")
async def health(
    settings: RenderSettings = Depends(get_settings),
    renderer: JsonRenderer = Depends(get_renderer),
) -> Response:
    return renderer.response(
        {"status": "ok", "escape_json_responses": settings.escape_json_responses}
    )


@app.get("/api/hello")
async def hello(
    callback: Optional[str] = Query(default=None),
    status: int = Query(default=200),
    renderer: JsonRenderer = Depends(get_renderer),
) -> Response:
    return renderer.response({"hello": "world"}, callback=callback, status=status)


@app.get("/api/unsafe")
async def unsafe(
    callback: Optional[str] = Query(default=None),
    renderer: JsonRenderer = Depends(get_renderer),
) -> Response:
    return renderer.response({"hello": "\u2028\u2029<script>"}, callback=callback)


@app.post("/api/render")
async def render(
    body: RenderPayload,
    renderer: JsonRenderer = Depends(get_renderer),
) -> Response:
    """Render an arbitrary JSON value with caller-supplied options.

    A string ``value`` is treated as pre-encoded JSON text; content_type
    overrides are limited to JSON and JavaScript types.
    """
    rendered = render_json(
        body.value,
        body.options,
        settings=renderer.settings,
        deprecator=renderer.deprecator,
    )
    return rendered.to_response()


# ── Settings endpoints ───────────────────────────────────────


@app.get("/api/settings")
async def get_render_settings(settings: RenderSettings = Depends(get_settings)):
    return settings.as_dict()
