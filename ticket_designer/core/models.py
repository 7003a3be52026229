from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Any, Dict
import uuid


KIND_TEXT = "text"
KIND_IMAGE = "image"
KIND_SPACING = "spacing"
KINDS = (KIND_TEXT, KIND_IMAGE, KIND_SPACING)

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"
ALIGNMENTS = (ALIGN_LEFT, ALIGN_CENTER, ALIGN_RIGHT)

SIZE_NORMAL = "normal"
SIZE_LARGE = "large"
SIZES = (SIZE_NORMAL, SIZE_LARGE)

DEFAULT_WIDTH = 270
DEFAULT_HEIGHT = 800
DEFAULT_PREVIEW_OVERLAY_SCALE = 0.775
DEFAULT_SPACING_HEIGHT = 24


def new_element_id() -> str:
    return uuid.uuid4().hex[:9]


# ---------- Core element model ----------

@dataclass
class TicketElement:
    kind: str                               # "text" | "image" | "spacing"
    content: str = ""                       # text, or a data: URI for images
    align: str = ALIGN_LEFT                 # left|center|right
    is_bold: bool = False
    size: str = SIZE_NORMAL                 # normal|large
    spacing_height: Optional[int] = None    # spacing only; < 0 means overlay
    variable_name: Optional[str] = None     # image file name used in the script
    id: str = field(default_factory=new_element_id)

    @property
    def is_overlay(self) -> bool:
        return self.kind == KIND_SPACING and (self.spacing_height or 0) < 0

    # ---- helpers used by persistence ----
    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "type": self.kind,
            "content": self.content,
            "align": self.align,
            "isBold": self.is_bold,
            "size": self.size,
        }
        if self.spacing_height is not None:
            d["spacingHeight"] = self.spacing_height
        if self.variable_name is not None:
            d["variableName"] = self.variable_name
        return d

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "TicketElement":
        kind = d.get("type", KIND_TEXT)
        height = d.get("spacingHeight")
        if kind == KIND_SPACING:
            # projects saved before spacing had an explicit height
            height = int(height) if height is not None else DEFAULT_SPACING_HEIGHT
        else:
            height = None
        return TicketElement(
            kind=kind,
            content=d.get("content") or "",
            align=d.get("align", ALIGN_LEFT),
            is_bold=bool(d.get("isBold", False)),
            size=d.get("size", SIZE_NORMAL),
            spacing_height=height,
            variable_name=d.get("variableName"),
            id=d.get("id") or new_element_id(),
        )


def new_element(kind: str, defaults: Optional[Dict[str, Any]] = None) -> TicketElement:
    """
    Build a fresh element the way the editor's "add" buttons do.

    *defaults* may override ``text_content``, ``spacing_height`` and
    ``image_name`` (see EditorSettings).
    """
    if kind not in KINDS:
        raise ValueError(f"Unknown element type: {kind}")
    defaults = defaults or {}
    elem = TicketElement(kind=kind)
    if kind == KIND_TEXT:
        elem.content = defaults.get("text_content", "新文字項目")
    elif kind == KIND_SPACING:
        elem.spacing_height = int(defaults.get("spacing_height", DEFAULT_SPACING_HEIGHT))
    elif kind == KIND_IMAGE:
        elem.variable_name = defaults.get("image_name", "logo.bin")
    return elem


# ---------- Project / document ----------

@dataclass
class TicketProject:
    name: str = "TicketProject"
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    preview_overlay_scale: float = DEFAULT_PREVIEW_OVERLAY_SCALE   # preview only

    elements: List[TicketElement] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "previewOverlayScale": self.preview_overlay_scale,
            "elements": [e.to_dict() for e in self.elements],
            "variables": dict(self.variables),
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "TicketProject":
        elements = d.get("elements")
        if not isinstance(elements, list):
            raise ValueError("Unrecognized project format: missing 'elements' list")
        p = TicketProject(
            name=d.get("name") or "LoadedTicket",
            width=d.get("width") or DEFAULT_WIDTH,
            # "minHeight" is the legacy key
            height=d.get("height") or d.get("minHeight") or DEFAULT_HEIGHT,
            preview_overlay_scale=d.get("previewOverlayScale") or DEFAULT_PREVIEW_OVERLAY_SCALE,
        )
        p.elements = [TicketElement.from_dict(x) for x in elements]
        p.variables = {str(k): str(v) for k, v in (d.get("variables") or {}).items()}
        return p
