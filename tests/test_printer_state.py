"""
Tests for the shared virtual printer state and its value tables.
"""
from __future__ import annotations

import dataclasses

import pytest

from ticket_designer.core.printer_state import (
    ALIGN_CODES,
    PrinterState,
    SIZE_CODES,
    decode_alignment,
    decode_bold,
    decode_font_size,
)


class TestInitialStates:
    def test_decode_defaults(self):
        s = PrinterState.for_decode()
        assert (s.alignment, s.bold, s.font_size) == ("left", False, "normal")

    def test_encode_alignment_undefined(self):
        """Encode side starts with no alignment so 'left' still differs."""
        s = PrinterState.for_encode()
        assert s.alignment is None
        assert s.needs_alignment("left")

    def test_reset_returns_decode_defaults(self):
        s = PrinterState("right", True, "large").reset()
        assert s == PrinterState.for_decode()


class TestTransitions:
    def test_states_are_immutable(self):
        s = PrinterState.for_decode()
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.bold = True  # type: ignore[misc]

    def test_with_methods_return_new_state(self):
        s = PrinterState.for_decode()
        t = s.with_alignment("center").with_bold(True).with_font_size("large")
        assert s == PrinterState.for_decode()
        assert (t.alignment, t.bold, t.font_size) == ("center", True, "large")

    def test_forced_alignment(self):
        s = PrinterState.for_decode()
        assert not s.needs_alignment("left")
        assert s.needs_alignment("left", force=True)

    def test_size_reset_only_from_large(self):
        assert PrinterState(font_size="large").needs_size_reset("normal")
        assert not PrinterState(font_size="normal").needs_size_reset("normal")
        assert not PrinterState(font_size="large").needs_size_reset("large")


class TestValueTables:
    @pytest.mark.parametrize("align", ["left", "center", "right"])
    def test_alignment_codes_decode_back(self, align):
        assert decode_alignment(ALIGN_CODES[align]) == align

    @pytest.mark.parametrize("size", ["normal", "large"])
    def test_size_codes_decode_back(self, size):
        assert decode_font_size(SIZE_CODES[size]) == size

    def test_ascii_digit_forms(self):
        assert decode_alignment(48) == "left"
        assert decode_alignment(49) == "center"
        assert decode_alignment(50) == "right"
        assert decode_bold(49) is True
        assert decode_bold(48) is False

    def test_double_width_and_height_is_large(self):
        assert decode_font_size(17) == "large"
        assert decode_font_size(16) == "normal"
