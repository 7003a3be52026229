"""
core/generator.py - Turn an ordered element list into a BinaryOut script.

The generator walks the elements once, carrying a PrinterState, and only
emits alignment / bold / size commands when the state actually changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .models import KIND_IMAGE, KIND_SPACING, KIND_TEXT, SIZE_LARGE, TicketElement
from .printer_state import (
    ALIGN_CODES,
    ESC,
    GS,
    OP_ALIGN,
    OP_BOLD,
    OP_CUT,
    OP_FEED,
    OP_PAGE_MODE,
    OP_RESET,
    OP_RETRACT,
    OP_SIZE,
    SIZE_CODES,
    TRAILER_FEED,
    PrinterState,
)
from .variables import has_placeholder

DEFAULT_IMAGE_NAME = "image.bin"

_ALIGN_COMMENTS = {"left": "文字置左", "center": "文字置中", "right": "文字置右"}


@dataclass(frozen=True)
class CodeLine:
    text: str
    element_id: Optional[str] = None     # element that produced the line, for highlighting


def _hex(n: int) -> str:
    return f"0x{n:02X}"


# Contract constants: the parser recognizes the trailer's cut signature.
PREAMBLE: List[str] = [
    'Encoding BIG5 = Encoding.GetEncoding("big5");',
    "",
    f"BinaryOut({_hex(ESC)}, {_hex(OP_RESET)});  // 重置出票機",
    f"BinaryOut({_hex(ESC)}, {_hex(OP_PAGE_MODE)});  // 整頁模式",
    "",
]
TRAILER: List[str] = [
    "",
    f"BinaryOut({_hex(ESC)}, {_hex(OP_FEED)}, {TRAILER_FEED}, {_hex(GS)}, {_hex(OP_CUT)}, 0); // 切紙",
]


def escape_text(content: str) -> str:
    """Newlines become the two characters backslash-n; nothing else is escaped."""
    return (content or "").replace("\n", "\\n")


def string_literal(content: str) -> str:
    text = escape_text(content)
    if has_placeholder(text):
        return f'$"{text}"'
    return f'"{text}"'


def generate_script(elements: Iterable[TicketElement]) -> List[CodeLine]:
    lines: List[CodeLine] = [CodeLine(t) for t in PREAMBLE]
    state = PrinterState.for_encode()

    def add(text: str, elem: TicketElement) -> None:
        lines.append(CodeLine(text, elem.id))

    def bold_toggle(elem: TicketElement) -> None:
        nonlocal state
        if state.needs_bold(elem.is_bold):
            if elem.is_bold:
                add(f"BinaryOut({_hex(ESC)}, {_hex(OP_BOLD)}, 0x01); //加粗", elem)
            else:
                add(f"BinaryOut({_hex(ESC)}, {_hex(OP_BOLD)}, 0x00); //取消加粗", elem)
            state = state.with_bold(elem.is_bold)

    for elem in elements:
        # 1. alignment; overlays always re-anchor
        if state.needs_alignment(elem.align, force=elem.is_overlay):
            code = ALIGN_CODES.get(elem.align, ALIGN_CODES["left"])
            comment = _ALIGN_COMMENTS.get(elem.align, "文字置左")
            add(f"BinaryOut({_hex(ESC)}, {_hex(OP_ALIGN)}, {_hex(code)});  // {comment}", elem)
            state = state.with_alignment(elem.align)

        # 2. content
        if elem.kind == KIND_SPACING:
            h = int(elem.spacing_height or 0)
            if h < 0:
                add(f"BinaryOut({_hex(ESC)}, {_hex(OP_RETRACT)}, {abs(h)});   // 重新對齊圖框起始位置 (Overlay)", elem)
            elif h > 0:
                add(f"BinaryOut({_hex(ESC)}, {_hex(OP_FEED)}, {h});", elem)

        elif elem.kind == KIND_IMAGE:
            name = elem.variable_name or DEFAULT_IMAGE_NAME
            add(
                f'BinaryOut(File.ReadAllBytes(Path.Combine(GlobalVariable.TicketLogoFolder, "{name}")));  // 載入圖片',
                elem,
            )

        elif elem.kind == KIND_TEXT:
            literal = string_literal(elem.content)
            if elem.size == SIZE_LARGE:
                bold_toggle(elem)
                add(
                    f"BinaryOut({_hex(GS)}, {_hex(OP_SIZE)}, {_hex(SIZE_CODES[SIZE_LARGE])}, BIG5.GetBytes({literal}));",
                    elem,
                )
                state = state.with_font_size(SIZE_LARGE)
            else:
                if state.needs_size_reset(elem.size):
                    add(f"BinaryOut({_hex(GS)}, {_hex(OP_SIZE)}, 0x00); //文字大小恢復", elem)
                    state = state.with_font_size(elem.size)
                bold_toggle(elem)
                add(f"BinaryOut(BIG5.GetBytes({literal}));", elem)

    lines.extend(CodeLine(t) for t in TRAILER)
    return lines


def script_text(lines: Iterable[CodeLine]) -> str:
    """Join generated lines for display or clipboard export."""
    return "\n".join(line.text for line in lines)
