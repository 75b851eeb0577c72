"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • backend_recipe        — a recipe dict as the backend returns it
  • backend_ingredient    — an ingredient dict as the backend returns it
  • backend_session       — a brew session embedding its recipe
  • fake_client(...)      — a bare object exposing interceptor chains
"""

from __future__ import annotations

import os
import sys
from types import SimpleNamespace

import pytest

# Ensure the project root is on the path so all brewtracker imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from brewtracker.api.interceptors import Interceptors  # noqa: E402
from brewtracker.metrics import reset_metrics_for_tests  # noqa: E402


# ---------------------------------------------------------------------------
# Backend payload samples
# ---------------------------------------------------------------------------

@pytest.fixture
def backend_recipe():
    return {
        "recipe_id": "42",
        "name": "West Coast IPA",
        "style": "American IPA",
        "batch_size": 5.0,
        "ingredients": [],
    }


@pytest.fixture
def backend_ingredient():
    return {
        "ingredient_id": "ing-7",
        "name": "Cascade",
        "type": "hop",
        "alpha_acid": 5.5,
    }


@pytest.fixture
def backend_session(backend_recipe):
    return {
        "session_id": "s-9",
        "brew_date": "2024-03-01",
        "recipe": dict(backend_recipe),
        "fermentation_data": [
            {"temperature": 68, "gravity": 1.050, "date": "2024-03-02"},
        ],
    }


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_client():
    """Factory for objects that only carry ``interceptors``."""
    def _factory(**overrides):
        if overrides:
            return SimpleNamespace(interceptors=SimpleNamespace(**overrides))
        return SimpleNamespace(interceptors=Interceptors())
    return _factory


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_metrics_for_tests()
    yield
    reset_metrics_for_tests()
