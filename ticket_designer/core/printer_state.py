"""
core/printer_state.py - The virtual printer state shared by the script
generator and the script parser.

Both directions read opcode numbers and value codes from this module only,
so "what does byte pattern X mean" has exactly one answer.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .models import ALIGN_CENTER, ALIGN_LEFT, ALIGN_RIGHT, SIZE_LARGE, SIZE_NORMAL


# ---------------------------------------------------------------------------
# Opcodes (ESC/POS)
# ---------------------------------------------------------------------------

ESC = 0x1B
GS = 0x1D

OP_RESET = 0x40       # ESC @
OP_PAGE_MODE = 0x02   # ESC STX, emitted in the preamble only
OP_ALIGN = 0x61       # ESC a n
OP_BOLD = 0x45        # ESC E n
OP_FEED = 0x4A        # ESC J n
OP_RETRACT = 0x4B     # ESC K n (overlay, printer specific)
OP_SIZE = 0x21        # GS ! n
OP_CUT = 0x56         # GS V m

TRAILER_FEED = 88

ALIGN_CODES = {ALIGN_LEFT: 0x00, ALIGN_CENTER: 0x01, ALIGN_RIGHT: 0x02}
SIZE_CODES = {SIZE_NORMAL: 0x00, SIZE_LARGE: 0x01}


def decode_alignment(n: int) -> str:
    # accepts both binary (0/1/2) and ASCII digit ('0'/'1'/'2') forms
    if n in (1, 49):
        return ALIGN_CENTER
    if n in (2, 50):
        return ALIGN_RIGHT
    return ALIGN_LEFT


def decode_bold(n: int) -> bool:
    return n in (1, 49)


def decode_font_size(n: int) -> str:
    # 17 = double width + double height, treated like 1
    return SIZE_LARGE if n in (1, 17) else SIZE_NORMAL


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PrinterState:
    """
    What the next emitted content will render as.

    ``alignment`` is ``None`` only on the encode side before the first
    alignment command, so the first element always emits one.
    """
    alignment: Optional[str] = ALIGN_LEFT
    bold: bool = False
    font_size: str = SIZE_NORMAL

    @classmethod
    def for_decode(cls) -> "PrinterState":
        return cls()

    @classmethod
    def for_encode(cls) -> "PrinterState":
        return cls(alignment=None)

    def reset(self) -> "PrinterState":
        return PrinterState.for_decode()

    def with_alignment(self, alignment: str) -> "PrinterState":
        return replace(self, alignment=alignment)

    def with_bold(self, bold: bool) -> "PrinterState":
        return replace(self, bold=bool(bold))

    def with_font_size(self, font_size: str) -> "PrinterState":
        return replace(self, font_size=font_size)

    # ---- encode-side questions ----
    def needs_alignment(self, alignment: str, force: bool = False) -> bool:
        return force or self.alignment != alignment

    def needs_bold(self, bold: bool) -> bool:
        return self.bold != bool(bold)

    def needs_size_reset(self, font_size: str) -> bool:
        return font_size == SIZE_NORMAL and self.font_size == SIZE_LARGE
