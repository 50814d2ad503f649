"""Exceptions raised by the event manager."""

from __future__ import annotations


class EventManagerError(Exception):
    """Base class for every error raised while registering, binding or dispatching."""


class InvalidArgumentError(EventManagerError, ValueError):
    """An event name or handler expression is malformed."""


class UnregisteredEventError(EventManagerError, LookupError):
    """Strict mode is on and the event was never registered."""

    def __init__(self, event: str) -> None:
        super().__init__(f"Event `{event}` not registered!")
        self.event = event


class UnrecognizedActionError(EventManagerError, TypeError):
    """The handler is neither callable, a descriptor, nor a string expression."""


class MissingTypeError(EventManagerError, LookupError):
    """A deferred action names a type that cannot be found at dispatch time."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"The specific type `{type_name}` does not exist in scope!")
        self.type_name = type_name


class NotCallableError(EventManagerError, TypeError):
    """The resolved target of an action cannot be invoked."""

    def __init__(self, rendered: str) -> None:
        super().__init__(f"Method not callable! Method provided: {rendered}")
        self.rendered = rendered
