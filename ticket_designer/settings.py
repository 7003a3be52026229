from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import json
from PySide6.QtCore import QSettings

from .core.models import (
    DEFAULT_HEIGHT,
    DEFAULT_PREVIEW_OVERLAY_SCALE,
    DEFAULT_SPACING_HEIGHT,
    DEFAULT_WIDTH,
    TicketProject,
)

SETTINGS_KEY = "editor_defaults"


@dataclass
class EditorSettings:
    """
    Defaults used when creating projects and elements.

    - project_*: new project page setup
    - variables: placeholder values seeded into new projects
    - new_*: what the "add text / spacing / image" actions start with
    """
    project_name: str = "TicketProject"
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    preview_overlay_scale: float = DEFAULT_PREVIEW_OVERLAY_SCALE
    variables: Dict[str, str] = field(default_factory=lambda: {
        "typename": "寶特瓶",
        "num": "5",
        "date": "112/11/10",
    })
    new_text_content: str = "新文字項目"
    new_spacing_height: int = DEFAULT_SPACING_HEIGHT
    new_image_name: str = "logo.bin"
    preview_columns: int = 32

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_name": self.project_name,
            "width": self.width,
            "height": self.height,
            "preview_overlay_scale": self.preview_overlay_scale,
            "variables": dict(self.variables),
            "new_text_content": self.new_text_content,
            "new_spacing_height": self.new_spacing_height,
            "new_image_name": self.new_image_name,
            "preview_columns": self.preview_columns,
        }

    def element_defaults(self) -> Dict[str, Any]:
        """Keyword defaults understood by core.models.new_element."""
        return {
            "text_content": self.new_text_content,
            "spacing_height": self.new_spacing_height,
            "image_name": self.new_image_name,
        }

    def new_project(self, name: Optional[str] = None) -> TicketProject:
        return TicketProject(
            name=name or self.project_name,
            width=self.width,
            height=self.height,
            preview_overlay_scale=self.preview_overlay_scale,
            variables=dict(self.variables),
        )


def _settings() -> QSettings:
    return QSettings("TicketDesigner", "TicketDesigner")


def load_settings(settings: Optional[QSettings] = None) -> EditorSettings:
    """
    Load editor defaults from QSettings.

    Missing or unreadable values fall back to the built-in defaults.
    """
    s = settings if settings is not None else _settings()
    raw = s.value(SETTINGS_KEY, "", type=str)

    if raw:
        try:
            data = json.loads(raw)
            if isinstance(data, dict):
                return EditorSettings.from_dict(data)
        except (ValueError, TypeError):
            # Corrupt value: fall back to defaults below.
            pass

    return EditorSettings()


def save_settings(editor: EditorSettings, settings: Optional[QSettings] = None) -> None:
    """
    Persist editor defaults to QSettings as JSON.
    """
    s = settings if settings is not None else _settings()
    raw = json.dumps(editor.to_dict(), indent=2, ensure_ascii=False)
    s.setValue(SETTINGS_KEY, raw)
    s.sync()
