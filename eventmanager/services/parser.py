"""Service for turning ``unit#Type@member`` strings into action descriptors."""

from __future__ import annotations

import re

from eventmanager.domain.errors import InvalidArgumentError
from eventmanager.domain.models import Action, ActionDescriptor, DirectAction

# Optional source unit before "#", optional type before "@", mandatory member.
ACTION_PATTERN = re.compile(r"^(([^#]+)#)?((\w+)@)?(\w+)$")


def parse_action(expression: str) -> ActionDescriptor:
    """Parse a handler string such as ``"lib.ext#Listener@handle"``.

    Raises ``InvalidArgumentError`` when no member name can be extracted,
    which includes strings that do not match the grammar at all.
    """
    match = ACTION_PATTERN.match(expression)
    if match is None or not match.group(5):
        raise InvalidArgumentError("Invalid argument(s) [empty callback provided]!")
    return ActionDescriptor(
        source_unit=match.group(2) or None,
        type_name=match.group(4) or None,
        member_name=match.group(5),
    )


def format_action(action: Action) -> str:
    """Render an action back into its string form, for logs and inspection."""
    if isinstance(action, DirectAction):
        target = action.target
        name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
        if name is None:
            return repr(target)
        module = getattr(target, "__module__", None)
        return f"{module}.{name}" if module else name

    text = action.member_name
    if action.type_name:
        text = f"{action.type_name}@{text}"
    if action.source_unit:
        text = f"{action.source_unit}#{text}"
    return text
