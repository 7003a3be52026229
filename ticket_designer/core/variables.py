"""
core/variables.py - {name} placeholder handling for ticket text.

Placeholders are kept verbatim in the script (as interpolated C# strings);
they are only substituted for previews.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional

# Greedy on purpose: "{a} and {b}" counts as one interpolated literal.
_HAS_PLACEHOLDER_RE = re.compile(r"\{.*\}")
_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


def has_placeholder(text: str) -> bool:
    return bool(text) and _HAS_PLACEHOLDER_RE.search(text) is not None


def placeholder_names(text: str) -> List[str]:
    """Names referenced by ``{name}`` tokens, in order of first use."""
    seen: List[str] = []
    for m in _PLACEHOLDER_RE.finditer(text or ""):
        name = m.group(1)
        if name not in seen:
            seen.append(name)
    return seen


def resolve_placeholders(text: str, variables: Optional[Dict[str, str]] = None) -> str:
    """
    Replace each ``{key}`` with its value.

    Unknown placeholders stay as literal text.
    """
    if not text or not variables:
        return text

    def _sub(m: re.Match) -> str:
        name = m.group(1)
        if name in variables:
            return str(variables[name])
        return m.group(0)

    return _PLACEHOLDER_RE.sub(_sub, text)
