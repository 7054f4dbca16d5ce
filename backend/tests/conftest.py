"""
Shared pytest fixtures for JSON rendering unit tests.
"""
import os
import sys
import pytest

# Ensure backend root is on sys.path so `core.*` imports work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Keep developer .env values from leaking into the tests
os.environ["ESCAPE_JSON_RESPONSES"] = "false"

from core.deprecation import Deprecator
from core.json_response import JsonRenderer
from core.settings import RenderSettings


@pytest.fixture
def deprecator():
    return Deprecator()


@pytest.fixture
def settings(deprecator):
    """Fresh settings with the forward-looking default (no escaping)."""
    return RenderSettings(escape_json_responses=False, deprecator=deprecator)


@pytest.fixture
def renderer(settings):
    return JsonRenderer(settings)
