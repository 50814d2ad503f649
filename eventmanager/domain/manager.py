"""Synchronous in-process event registration and dispatch."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Union

from pydantic import ValidationError

from eventmanager.domain.errors import (
    InvalidArgumentError,
    UnrecognizedActionError,
    UnregisteredEventError,
)
from eventmanager.domain.models import (
    Action,
    ActionDescriptor,
    DirectAction,
    EventArgs,
    ManagerSettings,
)
from eventmanager.repos.memory import EventRegistry, HandlerCatalog
from eventmanager.services.parser import format_action, parse_action
from eventmanager.services.resolver import ActionResolver, SourceUnitLoader

logger = logging.getLogger(__name__)

Handler = Union[Callable[[Any], Any], ActionDescriptor, Mapping[str, Any], str]

_MEMBER_KEYS = ("member_name", "member", "method")


def flatten_event_names(names: Any) -> list[Any]:
    """Expand a name or arbitrarily nested collection of names into a flat list.

    Mappings contribute their values, not their keys.
    """
    if isinstance(names, (str, bytes)) or not isinstance(names, Iterable):
        return [names]
    if isinstance(names, Mapping):
        names = names.values()
    flat: list[Any] = []
    for item in names:
        flat.extend(flatten_event_names(item))
    return flat


def _is_descriptor_shaped(handler: Any) -> bool:
    if isinstance(handler, ActionDescriptor):
        return True
    if not isinstance(handler, Mapping):
        return False
    return any(isinstance(handler.get(key), str) and handler.get(key) for key in _MEMBER_KEYS)


class EventManager:
    """Registry of event names and the actions bound to them.

    Actions for one event run synchronously in binding order and all receive
    the same mutable ``args`` value. In strict mode (the default) an event must
    be registered before it can be bound or triggered.
    """

    def __init__(
        self,
        strict_event: bool | None = None,
        *,
        settings: ManagerSettings | None = None,
        catalog: HandlerCatalog | None = None,
        loader: SourceUnitLoader | None = None,
    ) -> None:
        settings = settings or ManagerSettings()
        self.strict_event = settings.strict_event if strict_event is None else strict_event
        self.registry = EventRegistry()
        self.resolver = ActionResolver(catalog=catalog, loader=loader)

    @property
    def catalog(self) -> HandlerCatalog:
        return self.resolver.catalog

    # ------------------------------------------------------------------
    # Registrar
    # ------------------------------------------------------------------

    def register_event(self, names: Any) -> None:
        for name in flatten_event_names(names):
            self.registry.register(name)
            logger.debug("Registered event %s", name)

    # ------------------------------------------------------------------
    # Binder
    # ------------------------------------------------------------------

    def on(self, event: str | Mapping[str, Handler], handler: Handler | None = None) -> EventManager:
        """Bind *handler* to *event*, or every pair of a mapping when *handler* is omitted.

        A handler is a callable, an ``ActionDescriptor`` (or a mapping with a
        ``member_name``/``method`` key), or a ``"unit#Type@member"`` string.
        """
        if isinstance(event, Mapping) and handler is None:
            for name, value in event.items():
                self._bind(name, value)
            return self

        self._bind(event, handler)
        return self

    def _bind(self, event: Any, handler: Any) -> None:
        if not isinstance(event, str):
            raise InvalidArgumentError("Invalid argument(s)!")
        self._ensure_registered(event)

        action = self._to_action(handler)
        self.registry.append(event, action)
        logger.debug("Bound %s to event %s", format_action(action), event)

    @staticmethod
    def _to_action(handler: Any) -> Action:
        if callable(handler):
            return DirectAction(handler)

        if _is_descriptor_shaped(handler):
            if isinstance(handler, ActionDescriptor):
                return handler
            try:
                return ActionDescriptor.model_validate(dict(handler))
            except ValidationError as exc:
                raise InvalidArgumentError(f"Invalid action descriptor: {exc}") from exc

        if isinstance(handler, str):
            return parse_action(handler)

        raise UnrecognizedActionError("Cannot analyze action provided.")

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------

    def trigger(self, event: str, args: Any = None) -> EventManager:
        """Run every action bound to *event*, in binding order, with the shared *args*.

        Handler exceptions propagate unchanged; actions that already ran keep
        their effects.
        """
        if not isinstance(event, str):
            raise InvalidArgumentError("Invalid argument(s)!")
        self._ensure_registered(event)
        if args is None:
            args = EventArgs()

        actions = self.registry.actions_for(event)
        if not actions:
            return self

        logger.debug("Triggering %s (%d actions)", event, len(actions))
        for action in actions:
            self.resolver.call(action, args)
        return self

    def _ensure_registered(self, event: str) -> None:
        if self.strict_event and not self.registry.is_registered(event):
            raise UnregisteredEventError(event)


class EventHost:
    """Base for objects that announce events through an owned ``EventManager``.

    ``register_event``, ``on`` and ``trigger`` delegate to ``self.events`` and
    return the host, so calls chain on the host itself. Names listed in
    ``events_declared`` are registered when the host is created.
    """

    events_declared: Iterable[str] = ()

    def __init__(self, *, events: EventManager | None = None) -> None:
        self.events = events if events is not None else EventManager()
        self.events.register_event(list(self.events_declared))

    @property
    def strict_event(self) -> bool:
        return self.events.strict_event

    @strict_event.setter
    def strict_event(self, value: bool) -> None:
        self.events.strict_event = value

    def register_event(self, names: Any) -> None:
        self.events.register_event(names)

    def on(self, event: str | Mapping[str, Handler], handler: Handler | None = None) -> EventHost:
        self.events.on(event, handler)
        return self

    def trigger(self, event: str, args: Any = None) -> EventHost:
        self.events.trigger(event, args)
        return self
