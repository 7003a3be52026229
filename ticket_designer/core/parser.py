"""
core/parser.py - Rebuild an element list from BinaryOut script text.

The parser is best-effort and never raises: lines it does not understand
are skipped. An empty result means nothing was recognized; callers must
treat that as failure and keep their current elements.

Each line goes through two strategies, in order:

1. numeric-only calls (``BinaryOut(0x1B, 0x61, 1)``) decoded byte by byte
   against the PrinterState opcode table;
2. named matchers for text, sized text and image loads.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .models import KIND_IMAGE, KIND_SPACING, KIND_TEXT, TicketElement
from .printer_state import (
    ESC,
    GS,
    OP_ALIGN,
    OP_BOLD,
    OP_CUT,
    OP_FEED,
    OP_RESET,
    OP_RETRACT,
    OP_SIZE,
    PrinterState,
    decode_alignment,
    decode_bold,
    decode_font_size,
)

logger = logging.getLogger(__name__)

CALL_TOKEN = "BinaryOut"
DEFAULT_IMAGE_NAME = "image.bin"

_HEX_RE = re.compile(r"^0x[0-9a-f]+$", re.IGNORECASE)
_DEC_RE = re.compile(r"^\d+$")

_NUMERIC_CALL_RE = re.compile(r"BinaryOut\s*\(([\w\s,x]+)\)", re.IGNORECASE)
_LITERAL = r'\s*\(\s*\$?"((?:[^"\\]|\\.)*)"\s*\)'
_SIZED_TEXT_RE = re.compile(
    r"BinaryOut\s*\(\s*(?:0x1D|29)\s*,\s*(?:0x21|33)\s*,\s*(0x[0-9A-Fa-f]+|\d+)\s*,\s*BIG5\.GetBytes"
    + _LITERAL
    + r"\s*\)",
    re.IGNORECASE,
)
_TEXT_RE = re.compile(r"BIG5\.GetBytes" + _LITERAL, re.IGNORECASE)
_FILE_NAME_RE = re.compile(r'Path\.Combine\(.*,\s*"([^"]+)"\)')


def parse_int_permissive(token: str) -> Optional[int]:
    """Decode ``0x``-prefixed hex or decimal; ``None`` when neither fits."""
    clean = (token or "").strip()
    if _HEX_RE.match(clean):
        return int(clean, 16)
    if _DEC_RE.match(clean):
        return int(clean, 10)
    return None


def unescape_literal(text: str) -> str:
    return text.replace("\\n", "\n")


def clean_line(raw: str) -> str:
    """Trim and drop a trailing ``//`` comment. Comment-only lines become ''."""
    line = raw.strip()
    if not line or line.startswith("//"):
        return ""
    cut = line.find("//")
    if cut != -1:
        line = line[:cut].strip()
    return line


# ---------------------------------------------------------------------------
# Strategy 2 matchers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContentMatch:
    kind: str                        # "sized_text" | "text" | "image"
    literal: str                     # unescaped text, or the image file name
    size_code: Optional[int] = None  # sized_text only


def match_sized_text(line: str) -> Optional[ContentMatch]:
    m = _SIZED_TEXT_RE.search(line)
    if not m:
        return None
    size_code = parse_int_permissive(m.group(1))
    if size_code is None:
        return None
    return ContentMatch("sized_text", unescape_literal(m.group(2)), size_code)


def match_text(line: str) -> Optional[ContentMatch]:
    m = _TEXT_RE.search(line)
    if not m:
        return None
    return ContentMatch("text", unescape_literal(m.group(1)))


def match_image(line: str) -> Optional[ContentMatch]:
    if "File.ReadAllBytes" not in line:
        return None
    m = _FILE_NAME_RE.search(line)
    return ContentMatch("image", m.group(1) if m else DEFAULT_IMAGE_NAME)


# Priority order matters: sized text must win over plain text.
CONTENT_MATCHERS: Tuple[Callable[[str], Optional[ContentMatch]], ...] = (
    match_sized_text,
    match_text,
    match_image,
)


def match_content(line: str) -> Optional[ContentMatch]:
    for matcher in CONTENT_MATCHERS:
        found = matcher(line)
        if found is not None:
            return found
    return None


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _numeric_args(line: str) -> Optional[List[int]]:
    m = _NUMERIC_CALL_RE.search(line)
    if not m:
        return None
    values = []
    for token in m.group(1).split(","):
        n = parse_int_permissive(token)
        if n is None:
            return None
        values.append(n)
    return values


def _is_trailer(args: List[int]) -> bool:
    return len(args) >= 5 and args[3] == GS and args[4] == OP_CUT


class _ScriptDecoder:
    """One parse run: the mirror state machine plus the elements found so far."""

    def __init__(self):
        self.state = PrinterState.for_decode()
        self.elements: List[TicketElement] = []

    def _emit(self, kind: str, **kw) -> None:
        self.elements.append(
            TicketElement(
                kind=kind,
                align=self.state.alignment,
                is_bold=self.state.bold,
                size=self.state.font_size,
                **kw,
            )
        )

    def apply_numeric(self, args: List[int]) -> bool:
        """Apply a numeric command. Returns True when the line was consumed."""
        if len(args) < 2:
            return False
        first, second = args[0], args[1]
        n = args[2] if len(args) > 2 else None

        if first == ESC:
            if second == OP_RESET:
                self.state = self.state.reset()
                logger.debug("printer reset, state back to defaults")
                return True
            if n is None:
                return False
            if second == OP_ALIGN:
                self.state = self.state.with_alignment(decode_alignment(n))
                return True
            if second == OP_BOLD:
                self.state = self.state.with_bold(decode_bold(n))
                return True
            if second == OP_FEED:
                if _is_trailer(args):
                    return True
                self._emit(KIND_SPACING, spacing_height=n)
                return True
            if second == OP_RETRACT:
                self._emit(KIND_SPACING, spacing_height=-n)
                return True

        if first == GS and second == OP_SIZE and n is not None:
            self.state = self.state.with_font_size(decode_font_size(n))
            return True

        return False

    def apply_content(self, found: ContentMatch) -> None:
        if found.kind == "sized_text":
            size = decode_font_size(found.size_code)
            self.state = self.state.with_font_size(size)
            self._emit(KIND_TEXT, content=found.literal)
        elif found.kind == "text":
            self._emit(KIND_TEXT, content=found.literal)
        elif found.kind == "image":
            self._emit(KIND_IMAGE, content="", variable_name=found.literal)

    def feed(self, raw: str) -> None:
        line = clean_line(raw)
        if not line or CALL_TOKEN not in line:
            return

        args = _numeric_args(line)
        if args is not None and self.apply_numeric(args):
            return

        found = match_content(line)
        if found is not None:
            self.apply_content(found)
        else:
            logger.debug("skipping unrecognized line: %r", line)


def parse_script(code: str) -> List[TicketElement]:
    decoder = _ScriptDecoder()
    for raw in (code or "").split("\n"):
        decoder.feed(raw)
    return decoder.elements
