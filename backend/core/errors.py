"""
统一异常层级 for the JSON rendering backend.

所有自定义异常继承自 RenderError，每个异常类型关联 HTTP 状态码。
api/index.py 注册全局异常处理器将它们转为 JSON 响应。
"""
from __future__ import annotations


class RenderError(Exception):
    """Base error for all rendering errors."""

    status_code: int = 500

    def __init__(self, message: str = "", detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)


class SerializationError(RenderError, TypeError):
    """Value cannot be converted to a JSON-compatible structure."""

    status_code = 500


class InvalidRenderOptionsError(RenderError):
    """Render options failed validation (bad status, content type, shape)."""

    status_code = 400


class InvalidCallbackError(InvalidRenderOptionsError):
    """JSONP callback name is not a plain JavaScript identifier path."""

    status_code = 400
