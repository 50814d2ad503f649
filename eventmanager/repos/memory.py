"""In-memory stores for event registrations, bindings and named handlers."""

from __future__ import annotations

from typing import Any, Callable

from eventmanager.domain.models import Action


class EventRegistry:
    """Set of declared event names plus the ordered actions bound to each name.

    Owned by exactly one manager. Entries are only ever appended.
    """

    def __init__(self) -> None:
        self._registered: set[str] = set()
        self._bindings: dict[str, list[Action]] = {}

    def register(self, event: str) -> None:
        self._registered.add(event)

    def is_registered(self, event: str) -> bool:
        return event in self._registered

    def append(self, event: str, action: Action) -> None:
        self._bindings.setdefault(event, []).append(action)

    def actions_for(self, event: str) -> tuple[Action, ...]:
        return tuple(self._bindings.get(event, ()))

    def registered_events(self) -> tuple[str, ...]:
        return tuple(sorted(self._registered))

    def bound_events(self) -> tuple[str, ...]:
        """Event names with at least one action, in first-binding order."""
        return tuple(name for name, actions in self._bindings.items() if actions)


class HandlerCatalog:
    """Named handler types and functions that deferred actions resolve against.

    Types map to zero-argument factories (a class works as its own factory);
    functions map to plain callables.
    """

    def __init__(self) -> None:
        self._types: dict[str, Callable[[], Any]] = {}
        self._functions: dict[str, Callable[..., Any]] = {}

    def add_type(self, name: str, factory: Callable[[], Any]) -> None:
        self._types[name] = factory

    def add_function(self, name: str, fn: Callable[..., Any]) -> None:
        self._functions[name] = fn

    def get_type(self, name: str) -> Callable[[], Any] | None:
        return self._types.get(name)

    def get_function(self, name: str) -> Callable[..., Any] | None:
        return self._functions.get(name)

    def handler_type(self, cls: type | None = None, *, name: str | None = None):
        """Class decorator registering *cls* under its own name or *name*."""

        def decorate(target: type) -> type:
            self.add_type(name or target.__name__, target)
            return target

        if cls is not None:
            return decorate(cls)
        return decorate

    def handler(self, fn: Callable[..., Any] | None = None, *, name: str | None = None):
        """Function decorator registering *fn* under its own name or *name*."""

        def decorate(target: Callable[..., Any]) -> Callable[..., Any]:
            self.add_function(name or target.__name__, target)
            return target

        if fn is not None:
            return decorate(fn)
        return decorate
