"""Shared test fixtures for not-so-fast."""

from __future__ import annotations

import pytest

from notsofast.settings import Settings, get_settings
from tests.sample_models import User

USER_RENDERED = """\
.age: range: Number not in range: max=100, min=15, value=200
.cars: length: Invalid length: max=3, value=4
.cars[2]: char_length: Invalid character length: max=50, value=55
.nick: alpha_only"""


@pytest.fixture
def invalid_user() -> User:
    return User(
        nick="**tom1980**",
        age=200,
        cars=["first", "second", "third" * 11, "fourth"],
    )


@pytest.fixture
def valid_user() -> User:
    return User(nick="tom1980", age=42, cars=["first", "second"])


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep NOTSOFAST_* variables from the outer environment out of tests."""
    for name in ("NOTSOFAST_LOG_LEVEL", "NOTSOFAST_ROOT_PATH", "NOTSOFAST_ERRORS_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
