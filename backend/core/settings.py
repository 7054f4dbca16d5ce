"""
渲染配置对象：JSON 响应转义策略

escape_json_responses 是进程级开关，应在启动时设置。
将其设为 True 已弃用（仅 JSONP 回调响应始终转义），每次设置都会上报弃用提示。
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Optional

from .config import (
    DEFAULT_ESCAPE_JSON_RESPONSES,
    ENV_ESCAPE_JSON_RESPONSES,
    ESCAPE_JSON_RESPONSES_DEPRECATION,
    parse_bool,
)
from .deprecation import Deprecator, default_deprecator

logger = logging.getLogger(__name__)


class RenderSettings:
    """Process-wide rendering configuration, injected into renderers."""

    _FIELDS = ("escape_json_responses",)

    def __init__(
        self,
        escape_json_responses: bool = DEFAULT_ESCAPE_JSON_RESPONSES,
        deprecator: Optional[Deprecator] = None,
    ):
        self.deprecator = deprecator or default_deprecator
        self._escape_json_responses = False
        self.escape_json_responses = escape_json_responses

    @property
    def escape_json_responses(self) -> bool:
        return self._escape_json_responses

    @escape_json_responses.setter
    def escape_json_responses(self, value: bool) -> None:
        value = bool(value)
        if value:
            # re-setting True is reported too; only False is the supported state
            self.deprecator.warn(ESCAPE_JSON_RESPONSES_DEPRECATION)
        if value != self._escape_json_responses:
            logger.info(
                f"[SETTINGS] escape_json_responses: {self._escape_json_responses} → {value}"
            )
        self._escape_json_responses = value

    @contextmanager
    def override(self, **values):
        """Temporarily change settings, restoring the previous values on exit.

        Assignments go through the normal setters (so overriding to True is
        still reported); the restore step is silent.
        """
        unknown = set(values) - set(self._FIELDS)
        if unknown:
            raise TypeError(f"unknown render settings: {sorted(unknown)}")

        previous = {name: getattr(self, name) for name in values}
        try:
            for name, value in values.items():
                setattr(self, name, value)
            yield self
        finally:
            with self.deprecator.silence():
                for name, value in previous.items():
                    setattr(self, name, value)

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in self._FIELDS}


def load_settings(deprecator: Optional[Deprecator] = None) -> RenderSettings:
    """Build RenderSettings from environment variables (.env already loaded)."""
    escape = parse_bool(
        os.getenv(ENV_ESCAPE_JSON_RESPONSES), DEFAULT_ESCAPE_JSON_RESPONSES
    )
    settings = RenderSettings(escape_json_responses=escape, deprecator=deprecator)
    logger.info(f"[SETTINGS] Loaded render settings: {settings.as_dict()}")
    return settings
