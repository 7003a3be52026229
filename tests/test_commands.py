"""
Tests for undoable element edits.
"""
from __future__ import annotations

import pytest

from PySide6 import QtGui

from ticket_designer.core.commands import (
    AddElementCmd,
    attach_image,
    DeleteElementCmd,
    MoveElementCmd,
    PropertyChangeCmd,
    ReplaceElementsCmd,
    import_script,
)
from ticket_designer.core.models import TicketElement, TicketProject, new_element
from ticket_designer.core.persistence import save_project


@pytest.fixture()
def stack(qapp):
    return QtGui.QUndoStack()


@pytest.fixture()
def abc():
    return [TicketElement(kind="text", content=c) for c in "abc"]


def contents(elements):
    return [e.content for e in elements]


class TestAddDelete:
    def test_add_after_selection(self, stack, abc):
        new = new_element("spacing")
        stack.push(AddElementCmd(abc, new, after_id=abc[0].id))
        assert abc[1] is new
        stack.undo()
        assert contents(abc) == ["a", "b", "c"]

    def test_add_without_selection_appends(self, stack, abc):
        new = new_element("text")
        stack.push(AddElementCmd(abc, new, after_id="missing"))
        assert abc[-1] is new

    def test_delete_and_undo_restores_position(self, stack, abc):
        stack.push(DeleteElementCmd(abc, abc[1].id))
        assert contents(abc) == ["a", "c"]
        stack.undo()
        assert contents(abc) == ["a", "b", "c"]
        stack.redo()
        assert contents(abc) == ["a", "c"]

    def test_delete_unknown_id_is_noop(self, stack, abc):
        stack.push(DeleteElementCmd(abc, "nope"))
        stack.undo()
        assert contents(abc) == ["a", "b", "c"]


class TestMove:
    def test_move_up(self, stack, abc):
        stack.push(MoveElementCmd(abc, abc[2].id, "up"))
        assert contents(abc) == ["a", "c", "b"]
        stack.undo()
        assert contents(abc) == ["a", "b", "c"]

    def test_move_past_edges_is_noop(self, stack, abc):
        stack.push(MoveElementCmd(abc, abc[0].id, "up"))
        stack.push(MoveElementCmd(abc, abc[2].id, "down"))
        assert contents(abc) == ["a", "b", "c"]
        stack.undo()
        stack.undo()
        assert contents(abc) == ["a", "b", "c"]

    def test_bad_direction(self, abc):
        with pytest.raises(ValueError):
            MoveElementCmd(abc, abc[0].id, "sideways")


class TestPropertyChange:
    def test_set_and_undo(self, stack, abc):
        e = abc[0]
        stack.push(PropertyChangeCmd(e, "is_bold", False, True))
        assert e.is_bold is True
        stack.undo()
        assert e.is_bold is False

    def test_unknown_property(self, abc):
        with pytest.raises(AttributeError):
            PropertyChangeCmd(abc[0], "colour", None, "red")


class TestImport:
    def test_replace_and_undo(self, stack, abc):
        original = list(abc)
        stack.push(ReplaceElementsCmd(abc, [TicketElement(kind="spacing", spacing_height=5)]))
        assert [e.kind for e in abc] == ["spacing"]
        stack.undo()
        assert abc == original

    def test_import_script_success(self, stack, abc):
        ok = import_script(stack, abc, 'BinaryOut(BIG5.GetBytes("imported"));')
        assert ok is True
        assert contents(abc) == ["imported"]

    def test_import_garbage_keeps_elements(self, stack, abc):
        """Empty parse result must not overwrite the current layout."""
        ok = import_script(stack, abc, "not a script at all")
        assert ok is False
        assert contents(abc) == ["a", "b", "c"]
        assert stack.count() == 0


class TestAttachImage:
    PNG = b"\x89PNG\r\n\x1a\nfake"

    @pytest.fixture()
    def png_file(self, tmp_path):
        path = tmp_path / "upload.png"
        path.write_bytes(self.PNG)
        return str(path)

    def test_attach_then_save_exports_image(self, stack, png_file, tmp_path):
        """An attached file ends up in the saved project's image folder."""
        elem = new_element("image")
        attach_image(stack, elem, png_file)
        assert elem.content.startswith("data:image/png;base64,")

        project = TicketProject(name="Upload", elements=[elem])
        save_project(project, str(tmp_path / "out"))
        assert (tmp_path / "out" / "image" / "logo.png").read_bytes() == self.PNG

    def test_undo_restores_previous_content(self, stack, png_file):
        elem = new_element("image")
        attach_image(stack, elem, png_file)
        stack.undo()
        assert elem.content == ""

    def test_text_element_rejected(self, stack, png_file):
        with pytest.raises(ValueError):
            attach_image(stack, new_element("text"), png_file)
        assert stack.count() == 0

    def test_non_image_file_rejected(self, stack, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hi", encoding="utf-8")
        with pytest.raises(ValueError):
            attach_image(stack, new_element("image"), str(notes))
