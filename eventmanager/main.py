"""FastAPI application — read-only view of an event manager's registrations."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from eventmanager.domain.manager import EventManager
from eventmanager.log import configure_logging
from eventmanager.services.parser import format_action


class EventsOverview(BaseModel):
    strict_event: bool
    registered: list[str]
    bound: list[str]


class EventActions(BaseModel):
    event: str
    registered: bool
    actions: list[str]


def create_app(manager: EventManager, log_level: int | None = None) -> FastAPI:
    """Build an inspection app for *manager*. Nothing here binds or triggers.

    When *log_level* is given, package logging is sent to the console at that level.
    """
    if log_level is not None:
        configure_logging(log_level)
    app = FastAPI(title="Event Manager Inspector")

    @app.get("/events", response_model=EventsOverview)
    def list_events() -> EventsOverview:
        """Return registered names and names with at least one bound action."""
        registry = manager.registry
        return EventsOverview(
            strict_event=manager.strict_event,
            registered=list(registry.registered_events()),
            bound=list(registry.bound_events()),
        )

    @app.get("/events/{event}/actions", response_model=EventActions)
    def list_actions(event: str) -> EventActions:
        """Return the actions bound to *event*, rendered in binding order."""
        registry = manager.registry
        actions = registry.actions_for(event)
        registered = registry.is_registered(event)
        if not registered and not actions:
            raise HTTPException(status_code=404, detail="Event not found")
        return EventActions(
            event=event,
            registered=registered,
            actions=[format_action(action) for action in actions],
        )

    return app
