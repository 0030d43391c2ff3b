"""
Document undo history.

Each document owns a DocUndo. Commands run through it so they can be
undone and redone; observers hear about every new undo state and every
move of the current state.

Observer methods:
    on_add_undo_state(history)            - a command was executed
    on_current_undo_state_change(history) - undo, redo or clear moved the current state
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, List, Optional
from loguru import logger

from scriptevents.core.events import Observable


class UndoableCommand(ABC):
    """
    Command that supports undo/redo operations.

    Example:
        class ResizeCommand(UndoableCommand):
            def __init__(self, sprite, width, height):
                ...

            def execute(self):
                self.sprite.width, self.sprite.height = self.new_size

            def undo(self):
                self.sprite.width, self.sprite.height = self.old_size
    """

    @property
    def description(self) -> str:
        """Human-readable label shown in undo/redo menus."""
        return self.__class__.__name__

    @abstractmethod
    def execute(self) -> None:
        pass

    @abstractmethod
    def undo(self) -> None:
        pass

    def redo(self) -> None:
        self.execute()


class SetPropertyCommand(UndoableCommand):
    """
    Sets one attribute on a target, capturing the previous value for undo.

    Example:
        history.execute(SetPropertyCommand(sprite, "width", 64))
        history.undo()  # width restored
    """

    def __init__(self, target: Any, property_name: str, new_value: Any):
        self.target = target
        self.property_name = property_name
        self.new_value = new_value
        self.old_value = getattr(target, property_name, None)

    @property
    def description(self) -> str:
        return f"Set {self.property_name} to {self.new_value}"

    def execute(self) -> None:
        setattr(self.target, self.property_name, self.new_value)

    def undo(self) -> None:
        setattr(self.target, self.property_name, self.old_value)


class DocUndo(Observable):
    """
    Undo/redo stacks for one document.

    Usage:
        history = doc.undo_history
        history.add_observer(watcher)

        history.execute(SetPropertyCommand(sprite, "width", 64))
        history.undo()
        history.redo()
    """

    def __init__(self, max_history: int = 100):
        super().__init__()
        # Oldest states fall off the front once max_history is reached
        self._undo_stack: Deque[UndoableCommand] = deque(maxlen=max_history)
        self._redo_stack: List[UndoableCommand] = []
        self._max_history = max_history

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_description(self) -> Optional[str]:
        if self._undo_stack:
            return self._undo_stack[-1].description
        return None

    @property
    def redo_description(self) -> Optional[str]:
        if self._redo_stack:
            return self._redo_stack[-1].description
        return None

    def execute(self, command: UndoableCommand) -> None:
        """
        Execute a command and add it as a new undo state.

        Args:
            command: UndoableCommand to execute
        """
        try:
            command.execute()
        except Exception as e:
            logger.error(f"Command execution failed: {e}")
            raise

        self._undo_stack.append(command)

        # New action breaks the redo chain
        self._redo_stack.clear()

        logger.debug(f"Executed: {command.description}")
        self.notify_observers("on_add_undo_state", self)

    def undo(self) -> bool:
        """
        Undo the last command.

        Returns:
            True if undo was performed, False if nothing to undo
        """
        if not self._undo_stack:
            return False

        command = self._undo_stack.pop()
        try:
            command.undo()
        except Exception as e:
            logger.error(f"Undo failed: {e}")
            self._undo_stack.append(command)
            raise

        self._redo_stack.append(command)
        logger.debug(f"Undone: {command.description}")
        self.notify_observers("on_current_undo_state_change", self)
        return True

    def redo(self) -> bool:
        """
        Redo the last undone command.

        Returns:
            True if redo was performed, False if nothing to redo
        """
        if not self._redo_stack:
            return False

        command = self._redo_stack.pop()
        try:
            command.redo()
        except Exception as e:
            logger.error(f"Redo failed: {e}")
            self._redo_stack.append(command)
            raise

        self._undo_stack.append(command)
        logger.debug(f"Redone: {command.description}")
        self.notify_observers("on_current_undo_state_change", self)
        return True

    def clear(self) -> None:
        """Drop all undo/redo history."""
        if not self._undo_stack and not self._redo_stack:
            return
        self._undo_stack.clear()
        self._redo_stack.clear()
        logger.debug("Undo history cleared")
        self.notify_observers("on_current_undo_state_change", self)
