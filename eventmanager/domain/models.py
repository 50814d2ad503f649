"""Domain models for event bindings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_FALSE_VALUES = {"0", "false", "no", "off"}


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class ActionDescriptor(BaseModel):
    """A handler resolved lazily at trigger time.

    ``source_unit`` names a module (or ``.py`` file) to load first,
    ``type_name`` a type to instantiate with no arguments, and
    ``member_name`` the callable to invoke, either on that fresh instance or
    on its own when no type is given.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_unit: str | None = Field(
        default=None, validation_alias=AliasChoices("source_unit", "unit", "file")
    )
    type_name: str | None = Field(
        default=None, validation_alias=AliasChoices("type_name", "type", "class")
    )
    member_name: str = Field(
        min_length=1, validation_alias=AliasChoices("member_name", "member", "method")
    )

    @field_validator("source_unit", "type_name", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


@dataclass(frozen=True)
class DirectAction:
    """A handler that is already a callable."""

    target: Callable[[Any], Any]


Action = Union[DirectAction, ActionDescriptor]


# ---------------------------------------------------------------------------
# Trigger payload
# ---------------------------------------------------------------------------


class EventArgs(dict):
    """Mutable payload shared by every handler of a single trigger call.

    Keys are also reachable as attributes, so ``args.count += 1`` and
    ``args["count"] += 1`` are equivalent. Handlers must not keep a reference
    to it once they return.
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ManagerSettings(BaseModel):
    strict_event: bool = True

    @classmethod
    def from_env(cls) -> ManagerSettings:
        """Build settings from ``EVENT_MANAGER_STRICT``, defaulting to strict."""
        raw = os.environ.get("EVENT_MANAGER_STRICT")
        if raw is None:
            return cls()
        return cls(strict_event=raw.strip().lower() not in _FALSE_VALUES)
