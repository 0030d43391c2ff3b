"""
Host application model.

The objects scripts observe: the App singleton, its Context of open
documents, Doc/Sprite with their undo history, Preferences, and the
ObjectTable used to resolve ids back to live objects.
"""
from .objects import ObjectId, ObjectTable, Object, objects, get_object
from .doc_undo import UndoableCommand, SetPropertyCommand, DocUndo
from .doc import Doc, Sprite
from .context import Context, Site
from .preferences import Option, Preferences
from .app import App

__all__ = [
    "ObjectId",
    "ObjectTable",
    "Object",
    "objects",
    "get_object",
    "UndoableCommand",
    "SetPropertyCommand",
    "DocUndo",
    "Doc",
    "Sprite",
    "Context",
    "Site",
    "Option",
    "Preferences",
    "App",
]
