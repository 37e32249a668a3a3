from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
