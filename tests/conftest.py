# tests/conftest.py
from __future__ import annotations

import os

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def _clean_numeric_env(monkeypatch):
    """Config tests must not see STRAITJACKET_* values from the outer shell."""
    for key in list(os.environ):
        if key.startswith("STRAITJACKET_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def rng():
    return np.random.default_rng(20240501)
