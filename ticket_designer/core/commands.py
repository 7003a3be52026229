from __future__ import annotations

from typing import List, Optional

from PySide6 import QtGui

from .models import KIND_IMAGE, TicketElement
from .parser import parse_script
from .utils import image_data_uri


def _index_of(elements: List[TicketElement], element_id: Optional[str]) -> int:
    if element_id is None:
        return -1
    for i, e in enumerate(elements):
        if e.id == element_id:
            return i
    return -1


class AddElementCmd(QtGui.QUndoCommand):
    """
    Insert an element into the list.

    Goes right after *after_id* (the current selection) when that id is in
    the list, otherwise at the end.
    """

    def __init__(
        self,
        elements: List[TicketElement],
        element: TicketElement,
        after_id: Optional[str] = None,
        text: str = "Add element",
    ):
        super().__init__(text)
        self.elements = elements
        self.element = element
        self.after_id = after_id

    def redo(self) -> None:
        idx = _index_of(self.elements, self.after_id)
        if idx == -1:
            self.elements.append(self.element)
        else:
            self.elements.insert(idx + 1, self.element)

    def undo(self) -> None:
        idx = _index_of(self.elements, self.element.id)
        if idx != -1:
            del self.elements[idx]


class DeleteElementCmd(QtGui.QUndoCommand):
    """
    Remove an element by id.

    Remembers its index so undo puts it back in the same print position.
    """

    def __init__(
        self,
        elements: List[TicketElement],
        element_id: str,
        text: str = "Delete element",
    ):
        super().__init__(text)
        self.elements = elements
        self.element_id = element_id
        self._removed: Optional[TicketElement] = None
        self._index = -1

    def redo(self) -> None:
        idx = _index_of(self.elements, self.element_id)
        if idx == -1:
            self._removed = None
            return
        self._index = idx
        self._removed = self.elements.pop(idx)

    def undo(self) -> None:
        if self._removed is not None:
            self.elements.insert(self._index, self._removed)


class MoveElementCmd(QtGui.QUndoCommand):
    """
    Swap an element with its neighbour ("up" = earlier in print order).

    Moving past either end is a no-op.
    """

    def __init__(
        self,
        elements: List[TicketElement],
        element_id: str,
        direction: str,
        text: str = "Move element",
    ):
        super().__init__(text)
        if direction not in ("up", "down"):
            raise ValueError(f"Unknown direction: {direction}")
        self.elements = elements
        self.element_id = element_id
        self.direction = direction
        self._swapped: Optional[tuple[int, int]] = None

    def _swap(self, a: int, b: int) -> None:
        self.elements[a], self.elements[b] = self.elements[b], self.elements[a]

    def redo(self) -> None:
        self._swapped = None
        idx = _index_of(self.elements, self.element_id)
        if idx == -1:
            return
        other = idx - 1 if self.direction == "up" else idx + 1
        if 0 <= other < len(self.elements):
            self._swap(idx, other)
            self._swapped = (idx, other)

    def undo(self) -> None:
        if self._swapped is not None:
            self._swap(*self._swapped)


class PropertyChangeCmd(QtGui.QUndoCommand):
    """
    Generic property change on an element.

    elem:     element to mutate
    prop:     attribute name
    old/new:  values
    """

    def __init__(
        self,
        elem: TicketElement,
        prop: str,
        old_value,
        new_value,
        text: str = "Change property",
    ):
        super().__init__(text)
        if not hasattr(elem, prop):
            raise AttributeError(f"TicketElement has no property {prop!r}")
        self.elem = elem
        self.prop = prop
        self.old_value = old_value
        self.new_value = new_value

    def redo(self) -> None:
        setattr(self.elem, self.prop, self.new_value)

    def undo(self) -> None:
        setattr(self.elem, self.prop, self.old_value)


class ReplaceElementsCmd(QtGui.QUndoCommand):
    """Replace the whole element list in place (script import)."""

    def __init__(
        self,
        elements: List[TicketElement],
        new_elements: List[TicketElement],
        text: str = "Import script",
    ):
        super().__init__(text)
        self.elements = elements
        self._old = list(elements)
        self._new = list(new_elements)

    def redo(self) -> None:
        self.elements[:] = self._new

    def undo(self) -> None:
        self.elements[:] = self._old


def import_script(stack: QtGui.QUndoStack, elements: List[TicketElement], code: str) -> bool:
    """
    Parse *code* and replace *elements* with the result as one undo step.

    Returns False, leaving *elements* untouched, when nothing was recognized.
    """
    parsed = parse_script(code)
    if not parsed:
        return False
    stack.push(ReplaceElementsCmd(elements, parsed))
    return True


def attach_image(stack: QtGui.QUndoStack, elem: TicketElement, path: str) -> None:
    """
    Embed the image file at *path* into an image element as one undo step.

    Raises ValueError for non-image elements or non-image files.
    """
    if elem.kind != KIND_IMAGE:
        raise ValueError(f"Element {elem.id} is not an image")
    uri = image_data_uri(path)
    stack.push(PropertyChangeCmd(elem, "content", elem.content, uri, text="Load image"))
