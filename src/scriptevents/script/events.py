"""
Script event sources.

An event source keeps, per event type, the ordered list of callback
handles scripts registered with `on()`, and bridges those event types to
the host's own notifications. Host subscriptions are lazy: a source only
observes the host while at least one script listener exists for the
matching event type.

Two sources share the Events base:
- AppEvents: application-wide (active site, fg/bg color preferences)
- SpriteEvents: one per document sprite (undo history changes, filename)

Script usage:
    listener = app_events.on("sitechange", on_site_change)
    app_events.off(listener)        # by handle
    app_events.off(on_site_change)  # or by the callback itself
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional
from loguru import logger

from scriptevents.app.doc import Doc, Sprite
from scriptevents.app.objects import ObjectId, get_object
from scriptevents.core.events import Connection
from .engine import ScriptEngine, ScriptError

if TYPE_CHECKING:
    from scriptevents.app.app import App
    from scriptevents.app.doc_undo import DocUndo
    from .events_registry import EventsRegistry

EventListener = int


class Events(ABC):
    """
    Table of script listeners indexed by event type.

    Subclasses provide EVENT_NAMES and the two subscription hooks:
    _on_add_first_listener() runs when an event type gets its first
    listener, _on_remove_last_listener() when it loses its last one.
    """
    UNKNOWN = -1
    EVENT_NAMES: Dict[str, int] = {}

    def __init__(self, engine: ScriptEngine):
        self._engine = engine
        self._listeners: List[List[EventListener]] = []
        self._disposed = False

    @property
    def engine(self) -> ScriptEngine:
        return self._engine

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def event_type(self, event_name: Any) -> int:
        """Map an event name to its type; exact match, UNKNOWN otherwise."""
        if not isinstance(event_name, str):
            return self.UNKNOWN
        return self.EVENT_NAMES.get(event_name, self.UNKNOWN)

    # --- Listener table ---

    def has_listener(self, listener: EventListener) -> bool:
        for listeners in self._listeners:
            if listener in listeners:
                return True
        return False

    def listeners(self, event_type: int) -> List[EventListener]:
        if 0 <= event_type < len(self._listeners):
            return list(self._listeners[event_type])
        return []

    def listener_count(self, event_type: int) -> int:
        return len(self.listeners(event_type))

    def add(self, event_type: int, listener: EventListener) -> None:
        if event_type < 0:
            raise ValueError(f"Invalid event type: {event_type}")
        while event_type >= len(self._listeners):
            self._listeners.append([])

        listeners = self._listeners[event_type]
        listeners.append(listener)
        if len(listeners) == 1:
            logger.debug(f"{self.__class__.__name__}: first listener for event {event_type}")
            self._on_add_first_listener(event_type)

    def remove(self, listener: EventListener) -> None:
        """Remove every occurrence of `listener`, under every event type."""
        for event_type, listeners in enumerate(self._listeners):
            if listener not in listeners:
                continue
            listeners[:] = [l for l in listeners if l != listener]
            if not listeners:
                logger.debug(f"{self.__class__.__name__}: last listener removed for event {event_type}")
                self._on_remove_last_listener(event_type)

    def call(self, event_type: int) -> None:
        """
        Dispatch `event_type` to its listeners in registration order.

        Listeners may add or remove listeners while being called. The pass
        runs over a snapshot; a listener removed before its turn is skipped.
        Each failure is reported on the script console and the pass goes on.
        """
        if event_type < 0 or event_type >= len(self._listeners):
            return

        listeners = self._listeners[event_type]
        for listener in list(listeners):
            if listener not in listeners:
                continue
            self._engine.call(listener)

    # --- Script-facing API ---

    def on(self, event_name: Any, callback: Any) -> Optional[EventListener]:
        """
        Register `callback` for `event_name`.

        Returns:
            The EventListener handle, usable with off(); None when
            event_name is not a string or the source is disposed

        Raises:
            ScriptError: unknown event name or non-callable callback
        """
        if not isinstance(event_name, str):
            return None

        # Nothing would ever release the handle
        if self._disposed:
            logger.warning(f"{self.__class__.__name__}: on('{event_name}') after dispose ignored")
            return None

        event_type = self.event_type(event_name)
        if event_type < 0:
            raise ScriptError("invalid event name to listen")

        if not callable(callback):
            raise ScriptError("second argument must be a function")

        listener = self._engine.registry.ref(callback)
        self.add(event_type, listener)
        return listener

    def off(self, listener_or_callback: Any) -> None:
        """
        Unregister a listener by its EventListener handle or by the
        callback that was passed to on(). Unknown listeners are ignored.

        Raises:
            ScriptError: argument is neither a handle nor a function
        """
        listener: Optional[EventListener] = None

        if isinstance(listener_or_callback, int) and not isinstance(listener_or_callback, bool):
            listener = listener_or_callback
        elif callable(listener_or_callback):
            listener = self._find_listener(listener_or_callback)
        else:
            raise ScriptError("first argument must be a function or a EventListener")

        # Never release a registry entry this source doesn't own
        if listener is not None and self.has_listener(listener):
            self.remove(listener)
            self._engine.registry.unref(listener)

    def _find_listener(self, callback: Callable) -> Optional[EventListener]:
        # Scans the whole callback registry; the first handle holding this
        # exact callback and listed here wins.
        for handle, value in self._engine.registry.items():
            if value is callback and self.has_listener(handle):
                return handle
        return None

    # --- Teardown ---

    def dispose(self) -> None:
        """
        Drop every listener and release their handles.

        Last-listener hooks run, so host subscriptions are released too.
        """
        if self._disposed:
            return
        self._disposed = True

        handles: List[EventListener] = []
        for listeners in self._listeners:
            for handle in listeners:
                if handle not in handles:
                    handles.append(handle)

        for handle in handles:
            self.remove(handle)
            self._engine.registry.unref(handle)

    @abstractmethod
    def _on_add_first_listener(self, event_type: int) -> None:
        pass

    @abstractmethod
    def _on_remove_last_listener(self, event_type: int) -> None:
        pass


class AppEvents(Events):
    """
    Application-wide events.

    sitechange     - active document/layer/frame changed
    fgcolorchange  - foreground color preference changed
    bgcolorchange  - background color preference changed
    """
    SITE_CHANGE = 0
    FG_COLOR_CHANGE = 1
    BG_COLOR_CHANGE = 2

    EVENT_NAMES = {
        "sitechange": SITE_CHANGE,
        "fgcolorchange": FG_COLOR_CHANGE,
        "bgcolorchange": BG_COLOR_CHANGE,
    }

    def __init__(self, app: "App"):
        super().__init__(app.script_engine)
        self._context = app.context
        self._preferences = app.preferences
        self._fg_conn: Optional[Connection] = None
        self._bg_conn: Optional[Connection] = None

    def _on_add_first_listener(self, event_type: int) -> None:
        if event_type == self.SITE_CHANGE:
            self._context.add_observer(self)
        elif event_type == self.FG_COLOR_CHANGE:
            if self._fg_conn is None:
                self._fg_conn = self._preferences.color_bar.fg_color \
                    .after_change.connect(self._on_fg_color_change)
        elif event_type == self.BG_COLOR_CHANGE:
            if self._bg_conn is None:
                self._bg_conn = self._preferences.color_bar.bg_color \
                    .after_change.connect(self._on_bg_color_change)

    def _on_remove_last_listener(self, event_type: int) -> None:
        if event_type == self.SITE_CHANGE:
            self._context.remove_observer(self)
        elif event_type == self.FG_COLOR_CHANGE:
            if self._fg_conn is not None:
                self._fg_conn.disconnect()
                self._fg_conn = None
        elif event_type == self.BG_COLOR_CHANGE:
            if self._bg_conn is not None:
                self._bg_conn.disconnect()
                self._bg_conn = None

    def _on_fg_color_change(self):
        self.call(self.FG_COLOR_CHANGE)

    def _on_bg_color_change(self):
        self.call(self.BG_COLOR_CHANGE)

    # Context observer
    def on_active_site_change(self, site):
        self.call(self.SITE_CHANGE)


class SpriteEvents(Events):
    """
    Events of one sprite's document.

    change         - an undo state was added, or undo/redo moved the current one
    filenamechange - the document filename changed

    Only the sprite id is stored; the document is looked up through the
    object table on every access, and a failed lookup means it's gone.
    The registry owns instances and removes this one when the document
    closes.
    """
    CHANGE = 0
    FILENAME_CHANGE = 1

    EVENT_NAMES = {
        "change": CHANGE,
        "filenamechange": FILENAME_CHANGE,
    }

    def __init__(self, sprite: Sprite, app: "App", registry: "EventsRegistry"):
        super().__init__(app.script_engine)
        self._sprite_id: ObjectId = sprite.id
        self._lifecycle = app.lifecycle
        self._registry = registry
        self._observing_undo = False

        doc = self.doc()
        if doc is None:
            raise ValueError(f"Sprite {sprite.id} has no open document")
        doc.add_observer(self)

    @property
    def sprite_id(self) -> ObjectId:
        return self._sprite_id

    @property
    def observing_undo(self) -> bool:
        return self._observing_undo

    def doc(self) -> Optional[Doc]:
        sprite = get_object(self._sprite_id, Sprite)
        if sprite is None:
            return None
        return sprite.document

    def dispose(self) -> None:
        if self._disposed:
            return

        doc = self.doc()
        if doc is None and not self._lifecycle.is_closing:
            logger.warning(f"SpriteEvents: document of sprite {self._sprite_id} is already gone")

        if doc is not None:
            self._disconnect_from_undo_history(doc)
            doc.remove_observer(self)

        super().dispose()

    # Doc observer
    def on_close_document(self, doc: Doc):
        # Already torn down by an app exit that couldn't resolve the document
        if self._disposed:
            return
        self._registry.remove_sprite_events(self._sprite_id)

    def on_file_name_changed(self, doc: Doc):
        self.call(self.FILENAME_CHANGE)

    # DocUndo observer
    def on_add_undo_state(self, history: "DocUndo"):
        self.call(self.CHANGE)

    def on_current_undo_state_change(self, history: "DocUndo"):
        self.call(self.CHANGE)

    def _on_add_first_listener(self, event_type: int) -> None:
        if event_type != self.CHANGE:
            return
        doc = self.doc()
        if doc is None:
            logger.warning(f"SpriteEvents: can't observe undo history, sprite {self._sprite_id} is gone")
            return
        assert not self._observing_undo
        doc.undo_history.add_observer(self)
        self._observing_undo = True

    def _on_remove_last_listener(self, event_type: int) -> None:
        if event_type == self.CHANGE:
            self._disconnect_from_undo_history(self.doc())

    def _disconnect_from_undo_history(self, doc: Optional[Doc]) -> None:
        if not self._observing_undo:
            return
        if doc is not None:
            doc.undo_history.remove_observer(self)
        self._observing_undo = False
