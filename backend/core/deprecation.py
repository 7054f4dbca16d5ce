"""Deprecation reporter shared by configuration and rendering code."""
from __future__ import annotations

import logging
import threading
import warnings
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class Deprecator:
    """Emit deprecation notices as log records plus ``DeprecationWarning``.

    Callers hold an instance instead of calling ``warnings.warn`` directly so
    that restore paths (and tests) can silence notices they trigger on purpose.
    """

    def __init__(self, category: type[Warning] = DeprecationWarning):
        self.category = category
        self._silenced = 0
        self._lock = threading.Lock()

    @property
    def silenced(self) -> bool:
        return self._silenced > 0

    def warn(self, message: str, stacklevel: int = 3) -> None:
        if self.silenced:
            return
        logger.warning(f"[DEPRECATION] {message}")
        warnings.warn(message, self.category, stacklevel=stacklevel)

    @contextmanager
    def silence(self):
        with self._lock:
            self._silenced += 1
        try:
            yield
        finally:
            with self._lock:
                self._silenced -= 1


default_deprecator = Deprecator()
