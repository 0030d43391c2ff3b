"""
Process-wide registry of script event sources.

Holds the AppEvents singleton and one SpriteEvents per sprite that a
script asked events for. Both are created lazily and torn down
explicitly: a SpriteEvents when its document closes, everything when the
application exit signal fires. Nothing here relies on garbage
collection order.

Usage:
    events = push_app_events()
    events.on("sitechange", callback)

    sprite_events = push_sprite_events(doc.sprite)
    sprite_events.on("change", callback)
"""
from typing import TYPE_CHECKING, Dict, List, Optional
from loguru import logger

from scriptevents.app.objects import ObjectId
from scriptevents.core.events import Connection
from .events import AppEvents, SpriteEvents

if TYPE_CHECKING:
    from scriptevents.app.app import App
    from scriptevents.app.doc import Sprite


class EventsRegistry:
    """Owner of every live event source."""

    def __init__(self):
        self._app_events: Optional[AppEvents] = None
        self._sprite_events: Dict[ObjectId, SpriteEvents] = {}
        # Apps whose exit signal already tears down each kind of source
        self._app_events_exit_hook: Optional["App"] = None
        self._sprite_events_exit_hook: Optional["App"] = None
        self._app_events_exit_conn: Optional[Connection] = None
        self._sprite_events_exit_conn: Optional[Connection] = None

    # --- AppEvents ---

    def app_events(self, app: Optional["App"] = None) -> AppEvents:
        """Get the AppEvents singleton, creating it on first use."""
        app = app or _current_app()
        if self._app_events_exit_hook is not app:
            # Sources built for a replaced app must not outlive it
            if self._app_events_exit_conn is not None:
                self._app_events_exit_conn.disconnect()
            self.reset_app_events()
            self._app_events_exit_hook = app
            self._app_events_exit_conn = app.on_exit.connect(self.reset_app_events)

        if self._app_events is None:
            self._app_events = AppEvents(app)
            logger.debug("EventsRegistry: AppEvents created")
        return self._app_events

    def get_app_events(self) -> Optional[AppEvents]:
        return self._app_events

    def reset_app_events(self) -> None:
        events, self._app_events = self._app_events, None
        if events is not None:
            events.dispose()
            logger.debug("EventsRegistry: AppEvents destroyed")

    # --- SpriteEvents ---

    def sprite_events(self, sprite: "Sprite", app: Optional["App"] = None) -> SpriteEvents:
        """Get the SpriteEvents of `sprite`, creating it on first use."""
        assert sprite is not None
        app = app or _current_app()
        if self._sprite_events_exit_hook is not app:
            if self._sprite_events_exit_conn is not None:
                self._sprite_events_exit_conn.disconnect()
            self.clear_sprite_events()
            self._sprite_events_exit_hook = app
            self._sprite_events_exit_conn = app.on_exit.connect(self.clear_sprite_events)

        events = self._sprite_events.get(sprite.id)
        if events is None:
            events = SpriteEvents(sprite, app, self)
            self._sprite_events[sprite.id] = events
            logger.debug(f"EventsRegistry: SpriteEvents created for sprite {sprite.id}")
        return events

    def has_sprite_events(self, sprite_id: ObjectId) -> bool:
        return sprite_id in self._sprite_events

    def sprite_events_count(self) -> int:
        return len(self._sprite_events)

    def remove_sprite_events(self, sprite_id: ObjectId) -> None:
        """Destroy the SpriteEvents of `sprite_id` (its document is closing)."""
        assert sprite_id in self._sprite_events, f"No SpriteEvents for sprite {sprite_id}"
        events = self._sprite_events.pop(sprite_id, None)
        if events is not None:
            events.dispose()
            logger.debug(f"EventsRegistry: SpriteEvents destroyed for sprite {sprite_id}")

    def clear_sprite_events(self) -> None:
        events: List[SpriteEvents] = list(self._sprite_events.values())
        self._sprite_events.clear()
        for sprite_events in events:
            sprite_events.dispose()
        if events:
            logger.debug(f"EventsRegistry: {len(events)} SpriteEvents destroyed")

    def clear(self) -> None:
        """Tear down everything (same as an application exit)."""
        self.reset_app_events()
        self.clear_sprite_events()


def _current_app() -> "App":
    from scriptevents.app.app import App
    return App.instance()


# Global access
registry = EventsRegistry()


def push_app_events() -> AppEvents:
    return registry.app_events()


def push_sprite_events(sprite: "Sprite") -> SpriteEvents:
    return registry.sprite_events(sprite)
