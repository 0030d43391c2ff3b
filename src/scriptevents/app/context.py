"""
Application context - open documents and the active site.

Observers attached to the Context receive:
    on_add_document(doc)
    on_remove_document(doc)
    on_active_site_change(site)
"""
from dataclasses import dataclass
from typing import List, Optional
from loguru import logger

from scriptevents.core.events import Observable
from .doc import Doc


@dataclass(frozen=True)
class Site:
    """
    Snapshot of what the user is working on.

    Attributes:
        document: Active document, if any
        layer: Active layer index
        frame: Active frame index
    """
    document: Optional[Doc] = None
    layer: int = 0
    frame: int = 0

    @property
    def is_empty(self) -> bool:
        return self.document is None


class Context(Observable):
    """
    Tracks open documents and the active site.

    Usage:
        ctx.add_document(doc)
        ctx.set_active_document(doc)
        ctx.set_active_site(Site(doc, layer=1, frame=3))
        ctx.close_document(doc)
    """

    def __init__(self):
        super().__init__()
        self._documents: List[Doc] = []
        self._active_site = Site()

    @property
    def documents(self) -> List[Doc]:
        return list(self._documents)

    @property
    def active_site(self) -> Site:
        return self._active_site

    @property
    def active_document(self) -> Optional[Doc]:
        return self._active_site.document

    def add_document(self, doc: Doc) -> None:
        if doc in self._documents:
            logger.warning(f"Document already in context: {doc}")
            return
        self._documents.append(doc)
        self.notify_observers("on_add_document", doc)

    def close_document(self, doc: Doc) -> None:
        """
        Close a document and drop it from the context.

        If it was active, the most recently added remaining document
        becomes active (or the site becomes empty).
        """
        if doc not in self._documents:
            logger.warning(f"Document not in context: {doc}")
            return
        self._documents.remove(doc)
        self.notify_observers("on_remove_document", doc)

        if self._active_site.document is doc:
            fallback = self._documents[-1] if self._documents else None
            self.set_active_site(Site(fallback))

        doc.close()

    def set_active_document(self, doc: Optional[Doc]) -> None:
        self.set_active_site(Site(doc))

    def set_active_site(self, site: Site) -> None:
        self._active_site = site
        self.notify_observers("on_active_site_change", site)

    def close_all(self) -> None:
        for doc in reversed(self.documents):
            self.close_document(doc)
