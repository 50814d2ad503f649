"""Tests for hosts that announce events through an owned manager."""

from __future__ import annotations

import pytest

from eventmanager.domain.errors import UnregisteredEventError
from eventmanager.domain.manager import EventHost, EventManager
from eventmanager.domain.models import EventArgs


class UserService(EventHost):
    events_declared = ("user.created", "user.deleted")

    def create(self, name: str) -> EventArgs:
        args = EventArgs(name=name, count=0)
        self.trigger("user.created", args)
        return args


def test_declared_events_are_registered():
    service = UserService()
    assert service.events.registry.registered_events() == ("user.created", "user.deleted")


def test_host_methods_return_the_host():
    service = UserService()
    result = service.on("user.created", lambda args: None).on("user.deleted", "handle")
    assert result is service
    assert service.trigger("user.created", {}) is service


def test_host_end_to_end():
    service = UserService()
    order = []

    def h1(args):
        order.append("H1")
        args.count += 1

    def h2(args):
        order.append("H2")
        args.count += 1

    service.on("user.created", h1).on("user.created", h2)
    args = service.create("ada")

    assert order == ["H1", "H2"]
    assert args.count == 2
    assert args.name == "ada"


def test_host_strict_mode_property():
    service = UserService()
    with pytest.raises(UnregisteredEventError):
        service.trigger("user.updated")

    service.strict_event = False
    assert service.events.strict_event is False
    assert service.trigger("user.updated") is service


def test_host_with_injected_manager():
    manager = EventManager(strict_event=False)
    service = UserService(events=manager)
    assert service.events is manager
    assert manager.registry.is_registered("user.created")


def test_hosts_do_not_share_registries():
    a = UserService()
    b = UserService()
    a.register_event("only.a")
    a.on("only.a", lambda args: None)

    assert not b.events.registry.is_registered("only.a")
    assert b.events.registry.actions_for("only.a") == ()


def test_event_args_attribute_access():
    args = EventArgs(count=0)
    args.count += 1
    assert args["count"] == 1
    del args.count
    assert "count" not in args
    with pytest.raises(AttributeError):
        args.missing
