# ticket_designer/core/exceptions.py
"""
Consistent error types for project load/save.

No Qt dependencies: this module is pure Python so it can be used
from the CLI and from tests.
"""
from __future__ import annotations

import json


class ProjectError(Exception):
    """Base exception for all project file errors."""


class ProjectIOError(ProjectError):
    """The project file or its image folder could not be read or written."""


class ProjectFormatError(ProjectError):
    """The file was read but is not a ticket project."""


# ---------------------------------------------------------------------------
# Error-mapping helpers
# ---------------------------------------------------------------------------

_IO_PATTERNS: list[tuple[type, str]] = [
    (FileNotFoundError, "Project file not found."),
    (PermissionError, "Permission denied while accessing the project file."),
    (IsADirectoryError, "Expected a project file but found a directory."),
    (OSError, "Could not read or write the project file."),
]


def _chain(new: ProjectError, cause: BaseException) -> ProjectError:
    """Attach *cause* as ``__cause__`` (mimics ``raise new from cause``)."""
    new.__cause__ = cause
    return new


def map_exception(exc: BaseException) -> ProjectError:
    """
    Wrap a low-level exception into the appropriate ``ProjectError`` subclass
    with a user-friendly message while preserving the original as ``__cause__``.

    If *exc* is already a ``ProjectError`` it is returned unchanged.
    """
    if isinstance(exc, ProjectError):
        return exc

    for exc_type, message in _IO_PATTERNS:
        if isinstance(exc, exc_type):
            return _chain(ProjectIOError(message), exc)

    # JSONDecodeError is a ValueError, check it first for a clearer message
    if isinstance(exc, json.JSONDecodeError):
        return _chain(ProjectFormatError(f"File is not valid JSON: {exc.msg}"), exc)
    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return _chain(ProjectFormatError(str(exc)), exc)

    return _chain(ProjectError(str(exc)), exc)


def friendly_message(exc: BaseException) -> str:
    """Return a short, UI-safe description for *exc*."""
    mapped = map_exception(exc)
    return str(mapped)
