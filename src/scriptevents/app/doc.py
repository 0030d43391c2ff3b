"""
Documents and sprites.

A Doc wraps one Sprite and owns that sprite's undo history. Observers
attached to a Doc receive:
    on_file_name_changed(doc) - filename was changed
    on_close_document(doc)    - document is closing; the sprite still resolves
"""
from typing import Optional
from loguru import logger

from scriptevents.core.events import Observable
from .doc_undo import DocUndo
from .objects import Object


class Sprite(Object):
    """Image data of a document, addressable by id."""

    def __init__(self, width: int = 32, height: int = 32):
        super().__init__()
        self.width = width
        self.height = height
        self.document: Optional["Doc"] = None

    def __repr__(self) -> str:
        return f"Sprite(id={self.id}, {self.width}x{self.height})"


class Doc(Observable):
    """
    An open document.

    Usage:
        doc = Doc(Sprite(64, 64), filename="hero.png")
        doc.add_observer(watcher)
        doc.filename = "hero-v2.png"   # on_file_name_changed
        doc.close()                    # on_close_document, then sprite disposed
    """

    def __init__(self, sprite: Sprite, filename: str = "", max_history: int = 100):
        super().__init__()
        self._sprite = sprite
        sprite.document = self
        self._filename = filename
        self._undo_history = DocUndo(max_history=max_history)
        self._closed = False

    @property
    def sprite(self) -> Sprite:
        return self._sprite

    @property
    def undo_history(self) -> DocUndo:
        return self._undo_history

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def filename(self) -> str:
        return self._filename

    @filename.setter
    def filename(self, value: str):
        if value == self._filename:
            return
        self._filename = value
        self.notify_observers("on_file_name_changed", self)

    def close(self) -> None:
        """
        Close the document.

        Observers are told first, while the sprite id still resolves;
        after that the sprite is disposed and the id is dead.
        """
        if self._closed:
            return
        logger.debug(f"Closing document '{self._filename}'")
        self.notify_observers("on_close_document", self)
        self._closed = True
        self._sprite.document = None
        self._sprite.dispose()

    def __repr__(self) -> str:
        return f"Doc('{self._filename}', sprite={self._sprite.id})"
