"""Tests for configuration and logging setup."""

from __future__ import annotations

import logging

import pytest

from eventmanager.domain.errors import UnregisteredEventError
from eventmanager.domain.manager import EventManager
from eventmanager.domain.models import ManagerSettings
from eventmanager.log import configure_logging


def test_default_is_strict(monkeypatch):
    monkeypatch.delenv("EVENT_MANAGER_STRICT", raising=False)
    assert ManagerSettings.from_env().strict_event is True
    assert EventManager().strict_event is True


@pytest.mark.parametrize("raw", ["0", "false", "No", " off "])
def test_env_disables_strict(monkeypatch, raw):
    monkeypatch.setenv("EVENT_MANAGER_STRICT", raw)
    assert ManagerSettings.from_env().strict_event is False


@pytest.mark.parametrize("raw", ["1", "true", "yes"])
def test_env_enables_strict(monkeypatch, raw):
    monkeypatch.setenv("EVENT_MANAGER_STRICT", raw)
    assert ManagerSettings.from_env().strict_event is True


def test_settings_feed_manager():
    manager = EventManager(settings=ManagerSettings(strict_event=False))
    assert manager.trigger("anything") is manager


def test_explicit_flag_overrides_settings():
    manager = EventManager(strict_event=True, settings=ManagerSettings(strict_event=False))
    with pytest.raises(UnregisteredEventError):
        manager.trigger("anything")


def test_configure_logging_is_idempotent():
    logger = configure_logging(logging.DEBUG)
    configure_logging(logging.DEBUG)
    assert logger.name == "eventmanager"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_dispatch_is_logged(caplog):
    manager = EventManager()
    manager.register_event("user.created")
    manager.on("user.created", lambda args: None)

    with caplog.at_level(logging.DEBUG, logger="eventmanager"):
        manager.trigger("user.created", {})

    assert "Triggering user.created (1 actions)" in caplog.text
