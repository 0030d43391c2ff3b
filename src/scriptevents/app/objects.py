"""
Object id table.

Every host object that scripts can point at gets an ObjectId. Code that
must not keep an object alive (event sources, script handles) stores the
id and resolves it on each access; a failed lookup means the object is gone.
"""
import itertools
from typing import Any, Dict, Iterator, Optional, Type, TypeVar

from loguru import logger

ObjectId = int
NULL_ID: ObjectId = 0

T = TypeVar("T")


class ObjectTable:
    """
    Arena of live objects indexed by id.

    Ids are never reused, so a stale id can't resolve to an object
    created later.
    """

    def __init__(self):
        self._objects: Dict[ObjectId, Any] = {}
        self._next_id = itertools.count(1)

    def register(self, obj: Any) -> ObjectId:
        object_id = next(self._next_id)
        self._objects[object_id] = obj
        return object_id

    def unregister(self, object_id: ObjectId) -> None:
        if self._objects.pop(object_id, None) is None:
            logger.debug(f"ObjectTable: id {object_id} was not registered")

    def get(self, object_id: ObjectId, cls: Optional[Type[T]] = None) -> Optional[T]:
        """
        Resolve an id.

        Args:
            object_id: Id to look up
            cls: Expected type; objects of another type resolve to None

        Returns:
            The live object, or None if it was destroyed
        """
        obj = self._objects.get(object_id)
        if obj is not None and cls is not None and not isinstance(obj, cls):
            return None
        return obj

    def __contains__(self, object_id: ObjectId) -> bool:
        return object_id in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[ObjectId]:
        return iter(list(self._objects))

    def clear(self) -> None:
        self._objects.clear()


# Global access
objects = ObjectTable()


def get_object(object_id: ObjectId, cls: Optional[Type[T]] = None) -> Optional[T]:
    return objects.get(object_id, cls)


class Object:
    """Base class for host objects addressable by id."""

    def __init__(self):
        self._id = objects.register(self)

    @property
    def id(self) -> ObjectId:
        return self._id

    @property
    def is_disposed(self) -> bool:
        return self._id not in objects

    def dispose(self) -> None:
        """Remove this object from the id table; its id stops resolving."""
        objects.unregister(self._id)
