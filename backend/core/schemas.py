"""
Pydantic 输入验证模型
为渲染选项和 API 请求体提供类型和范围校验
"""
from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import (
    DEFAULT_STATUS,
    JSONP_CALLBACK_MAX_LENGTH,
    JSONP_CALLBACK_PATTERN,
    JSON_CONTENT_TYPE_PATTERN,
    RENDER_OPTION_KEYS,
    RESERVED_OPTION_KEYS,
    VIEW_OPTION_KEYS,
)
from .errors import InvalidCallbackError, InvalidRenderOptionsError

_CALLBACK_RE = re.compile(JSONP_CALLBACK_PATTERN, re.ASCII)

_CONTENT_TYPE_RE = re.compile(JSON_CONTENT_TYPE_PATTERN, re.ASCII | re.IGNORECASE)


class RenderOptions(BaseModel):
    """Per-call render options.

    Unknown keys are kept as extras and forwarded to ``__json__`` hooks.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: int = Field(default=DEFAULT_STATUS, ge=100, le=599, description="HTTP 状态码")
    content_type: Optional[str] = Field(default=None, description="Content-Type 覆盖")
    callback: Optional[str] = Field(default=None, description="JSONP 回调函数名")
    except_: Optional[list[str]] = Field(
        default=None, alias="except", description="序列化钩子需剔除的字段"
    )
    escape: Optional[bool] = Field(default=None, description="单次调用转义开关（True 已弃用）")

    @field_validator("callback")
    @classmethod
    def validate_callback(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v:
            return None
        if len(v) > JSONP_CALLBACK_MAX_LENGTH or not _CALLBACK_RE.fullmatch(v):
            raise ValueError(f"无效 JSONP 回调名: {v!r}")
        return v

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not _CONTENT_TYPE_RE.fullmatch(v):
            raise ValueError(f"无效 Content-Type: {v!r}")
        return v

    @field_validator("except_", mode="before")
    @classmethod
    def coerce_except(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v

    def serialization_options(self) -> dict:
        """Options handed to ``__json__`` hooks: everything the caller set
        except rendering and view-layer keys."""
        opts: dict[str, Any] = {}
        if self.except_ is not None:
            opts["except"] = list(self.except_)
        for key, value in (self.model_extra or {}).items():
            if key in RENDER_OPTION_KEYS or key in VIEW_OPTION_KEYS:
                continue
            opts[key] = value
        return opts


def parse_render_options(options: Optional[dict | RenderOptions] = None) -> RenderOptions:
    """Validate a raw options mapping, raising domain errors on failure."""
    if isinstance(options, RenderOptions):
        return options
    reserved = RESERVED_OPTION_KEYS.intersection(options or {})
    if reserved:
        raise InvalidRenderOptionsError(
            "invalid render options", detail=f"reserved option keys: {sorted(reserved)}"
        )
    try:
        return RenderOptions.model_validate(options or {})
    except ValidationError as exc:
        locs = {err["loc"][0] for err in exc.errors() if err.get("loc")}
        if "callback" in locs:
            raise InvalidCallbackError("invalid JSONP callback", detail=str(exc)) from exc
        raise InvalidRenderOptionsError("invalid render options", detail=str(exc)) from exc


class RenderPayload(BaseModel):
    """POST /api/render 请求体"""

    value: Any = Field(default=None, description="待序列化的值")
    options: dict[str, Any] = Field(default_factory=dict, description="渲染选项")

