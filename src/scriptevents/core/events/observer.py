from loguru import logger
from typing import Any, Callable, List, Optional


class Connection:
    """
    Token returned by Signal.connect().
    Dropping the subscription goes through disconnect(), which is safe
    to call any number of times.
    """
    def __init__(self, signal: "Signal", callback: Callable):
        self._signal: Optional[Signal] = signal
        self._callback = callback

    @property
    def connected(self) -> bool:
        return self._signal is not None and self._signal.is_connected(self._callback)

    def disconnect(self):
        """Disconnect the callback from its signal (idempotent)."""
        if self._signal is not None:
            self._signal.disconnect(self._callback)
            self._signal = None


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []
        self._connections: List[Connection] = []

    def connect(self, callback: Callable) -> Connection:
        """
        Connect a callback function to this signal.
        Connecting an already connected callback returns its existing token.
        """
        for conn in self._connections:
            if conn._callback == callback:
                return conn
        self._subscribers.append(callback)
        conn = Connection(self, callback)
        self._connections.append(conn)
        return conn

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)
        for conn in [c for c in self._connections if c._callback == callback]:
            self._connections.remove(conn)
            conn._signal = None

    def is_connected(self, callback: Callable) -> bool:
        return callback in self._subscribers

    def __len__(self) -> int:
        return len(self._subscribers)

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        # Subscribers may disconnect themselves while being notified
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")


class OneShotSignal(Signal):
    """
    Signal that can only fire once per lifetime.
    Later emits are ignored, so late subscribers are never called.
    """
    def __init__(self, name: str = "OneShotSignal"):
        super().__init__(name)
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def emit(self, *args, **kwargs):
        if self._fired:
            logger.debug(f"Signal '{self.name}' already fired, ignoring emit")
            return
        self._fired = True
        super().emit(*args, **kwargs)
        self._subscribers.clear()
        for conn in self._connections:
            conn._signal = None
        self._connections.clear()


class Observable:
    """
    Observer list for host objects (documents, undo history, context).

    Observers are plain objects; notify_observers() calls the named
    method on each observer that defines it and skips the rest.

    Usage:
        doc.add_observer(watcher)
        doc.notify_observers("on_file_name_changed", doc)
    """
    def __init__(self):
        self._observers: List[Any] = []

    def add_observer(self, observer: Any):
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: Any):
        if observer in self._observers:
            self._observers.remove(observer)

    def has_observer(self, observer: Any) -> bool:
        return observer in self._observers

    @property
    def observers(self) -> List[Any]:
        return list(self._observers)

    def notify_observers(self, method_name: str, *args):
        """Call `method_name(*args)` on every observer that implements it."""
        for observer in list(self._observers):
            # Removed by an earlier observer during this notification
            if observer not in self._observers:
                continue
            method = getattr(observer, method_name, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception as e:
                logger.error(f"{self.__class__.__name__}: observer '{observer}' failed in {method_name}: {e}")
