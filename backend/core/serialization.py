"""
JSON 序列化协作者

as_structured() 通过 FastAPI 的 jsonable_encoder 把任意值转换成 JSON 兼容结构，
to_json_text() 输出紧凑 JSON 文本，escape_js_chars() 对 <script> 上下文敏感字符做转义。
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any, Optional, Protocol, runtime_checkable

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from .config import JS_ESCAPE_MAP
from .errors import SerializationError

logger = logging.getLogger(__name__)

_JS_ESCAPE_TABLE = str.maketrans(JS_ESCAPE_MAP)


@runtime_checkable
class JsonSerializable(Protocol):
    """Capability implemented by values that control their own JSON shape."""

    def __json__(self, options: dict) -> Any: ...


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _nested_hook(value: JsonSerializable) -> Any:
    # nested values never see the caller's options
    return _encode(value.__json__({}))


_ENCODERS = {
    float: _finite_or_none,
    JsonSerializable: _nested_hook,
}


def _encode(value: Any, exclude: Optional[set] = None) -> Any:
    return jsonable_encoder(value, exclude=exclude, custom_encoder=_ENCODERS)


def as_structured(value: Any, options: Optional[dict] = None) -> Any:
    """Convert ``value`` to plain dicts/lists/scalars.

    ``options`` only reach the top-level ``__json__`` hook or pydantic model
    (``except`` becomes ``exclude``); plain mappings and sequences ignore them.
    """
    options = options or {}
    exclude = None

    if isinstance(value, JsonSerializable) and not isinstance(value, type):
        value = value.__json__(dict(options))
    elif isinstance(value, BaseModel):
        exclude = set(options.get("except") or ()) or None

    try:
        return _encode(value, exclude=exclude)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Value of type {type(value).__name__} is not JSON serializable",
            detail=str(e)[:200],
        ) from e


def to_json_text(value: Any, options: Optional[dict] = None) -> str:
    """Serialize ``value`` as compact JSON, non-ASCII kept as-is."""
    structured = as_structured(value, options)
    try:
        return json.dumps(
            structured,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e


def escape_js_chars(text: str) -> str:
    """Escape U+2028, U+2029, <, > and & as \\uXXXX sequences.

    Safe on JSON text: these characters can only appear inside string
    literals, where the escaped form decodes to the same value.
    """
    return text.translate(_JS_ESCAPE_TABLE)
