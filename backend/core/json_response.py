"""
JSON 响应渲染器
将任意值 + 渲染选项转换为响应体、Content-Type 和状态码
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Response

from .config import (
    DEFAULT_STATUS,
    ESCAPE_JSON_RESPONSES_DEPRECATION,
    JSONP_PREFIX,
    MIME_JS,
    MIME_JSON,
)
from .deprecation import Deprecator
from .schemas import RenderOptions, parse_render_options
from .serialization import escape_js_chars, to_json_text
from .settings import RenderSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedResponse:
    body: str
    content_type: str = MIME_JSON
    status: int = DEFAULT_STATUS

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status,
            media_type=self.content_type,
        )


# ── Public API ───────────────────────────────────────────────


def render_json(
    value: Any,
    options: Optional[dict | RenderOptions] = None,
    *,
    settings: RenderSettings,
    deprecator: Optional[Deprecator] = None,
) -> RenderedResponse:
    """Render ``value`` as a JSON (or JSONP) response.

    - ``None`` renders as ``null``; a ``str`` is taken as pre-encoded JSON.
    - With ``callback`` the payload is wrapped as ``/**/cb(...)``, served as
      text/javascript and always JS-escaped.
    - Without it, escaping follows the per-call ``escape`` option, falling
      back to ``settings.escape_json_responses``.
    """
    opts = parse_render_options(options)
    deprecator = deprecator or settings.deprecator

    if value is None:
        json_text = "null"
    elif isinstance(value, str):
        json_text = value
    else:
        json_text = to_json_text(value, opts.serialization_options())

    if opts.callback:
        body = f"{JSONP_PREFIX}{opts.callback}({escape_js_chars(json_text)})"
        content_type = MIME_JS
    else:
        if opts.escape:
            deprecator.warn(ESCAPE_JSON_RESPONSES_DEPRECATION)
        escape = settings.escape_json_responses if opts.escape is None else opts.escape
        body = escape_js_chars(json_text) if escape else json_text
        content_type = opts.content_type or MIME_JSON

    logger.debug(
        f"[RENDER] status={opts.status} content_type={content_type} "
        f"callback={opts.callback or '-'} bytes={len(body)}"
    )
    return RenderedResponse(body=body, content_type=content_type, status=opts.status)


class JsonRenderer:
    """render_json bound to one settings object, for use inside controllers."""

    def __init__(self, settings: RenderSettings, deprecator: Optional[Deprecator] = None):
        self.settings = settings
        self.deprecator = deprecator or settings.deprecator

    def render(self, value: Any, /, **options) -> RenderedResponse:
        return render_json(
            value, options, settings=self.settings, deprecator=self.deprecator
        )

    def response(self, value: Any, /, **options) -> Response:
        return self.render(value, **options).to_response()
