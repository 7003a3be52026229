from __future__ import annotations

import unicodedata
from typing import Dict, Iterable, List, Optional

from .models import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    DEFAULT_SPACING_HEIGHT,
    KIND_IMAGE,
    KIND_SPACING,
    KIND_TEXT,
    SIZE_LARGE,
    TicketElement,
)
from .variables import resolve_placeholders


def display_width(text: str) -> int:
    """Terminal columns used by *text*; wide (CJK) characters count double."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def align_line(text: str, align: str, columns: int) -> str:
    pad = max(columns - display_width(text), 0)
    if align == ALIGN_CENTER:
        left = pad // 2
    elif align == ALIGN_RIGHT:
        left = pad
    else:
        left = 0
    return (" " * left + text).rstrip()


def _styled(line: str, elem: TicketElement) -> str:
    if elem.size == SIZE_LARGE:
        line = " ".join(line)   # double width
    if elem.is_bold and line:
        line = f"*{line}*"
    return line


def render_preview(
    elements: Iterable[TicketElement],
    variables: Optional[Dict[str, str]] = None,
    columns: int = 32,
) -> List[str]:
    """
    Plain-text approximation of the printed ticket.

    Feeds become blank lines (one per default spacing step, at least one),
    overlays a marker line, images a bracketed placeholder.
    """
    out: List[str] = []
    for elem in elements:
        if elem.kind == KIND_TEXT:
            content = resolve_placeholders(elem.content, variables)
            for line in content.split("\n"):
                out.append(align_line(_styled(line, elem), elem.align, columns))
        elif elem.kind == KIND_IMAGE:
            out.append(align_line(f"[image: {elem.variable_name or 'image.bin'}]", elem.align, columns))
        elif elem.kind == KIND_SPACING:
            h = int(elem.spacing_height or 0)
            if h < 0:
                out.append(align_line(f"~~ overlay {abs(h)} ~~", elem.align, columns))
            elif h > 0:
                out.extend([""] * max(1, round(h / DEFAULT_SPACING_HEIGHT)))
    return out
