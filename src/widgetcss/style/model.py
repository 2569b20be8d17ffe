"""Computed style value and its field types."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Iterable

# Properties copied from a parent by Style.inherit.
INHERITED_PROPERTIES: frozenset[str] = frozenset({"color", "opacity", "visible"})


class Display(Enum):
    FLEX = "flex"
    BLOCK = "block"
    GRID = "grid"
    NONE = "none"


class Position(Enum):
    STATIC = "static"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    FIXED = "fixed"
    STICKY = "sticky"


class FlexDirection(Enum):
    ROW = "row"
    COLUMN = "column"


class JustifyContent(Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"


class AlignItems(Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    STRETCH = "stretch"


class BorderStyle(Enum):
    NONE = "none"
    SOLID = "solid"
    DASHED = "dashed"
    DOUBLE = "double"
    ROUNDED = "rounded"


_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*"
    r"(?:,\s*(\d+(?:\.\d+)?|\.\d+)\s*)?\)$"
)

_NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
}


@dataclass(frozen=True)
class Color:
    """RGBA color. The all-zero default means "not set"."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Color:
        return cls(r, g, b, 255)

    @classmethod
    def hex(cls, value: int) -> Color:
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)

    @classmethod
    def parse(cls, text: str) -> Color | None:
        """Parse ``#rgb``, ``#rrggbb``, ``rgb()``/``rgba()`` or a color name."""
        text = text.strip().lower()
        if text == "transparent":
            return cls()
        if text in _NAMED_COLORS:
            return cls.rgb(*_NAMED_COLORS[text])
        m = _HEX_RE.match(text)
        if m:
            digits = m.group(1)
            if len(digits) == 3:
                digits = "".join(d * 2 for d in digits)
            return cls.hex(int(digits, 16))
        m = _RGB_RE.match(text)
        if m:
            r, g, b = (int(m.group(i)) for i in (1, 2, 3))
            if max(r, g, b) > 255:
                return None
            alpha = 255
            if m.group(4) is not None:
                alpha = round(min(float(m.group(4)), 1.0) * 255)
            return cls(r, g, b, alpha)
        return None


@dataclass(frozen=True)
class Size:
    """A length: ``auto``, a fixed cell count, or a percentage."""

    kind: str = "auto"
    value: float = 0.0

    @classmethod
    def auto(cls) -> Size:
        return cls()

    @classmethod
    def fixed(cls, cells: int) -> Size:
        return cls("fixed", float(cells))

    @classmethod
    def percent(cls, pct: float) -> Size:
        return cls("percent", float(pct))

    @classmethod
    def parse(cls, text: str) -> Size | None:
        text = text.strip().lower()
        if text == "auto":
            return cls.auto()
        if text.endswith("%"):
            try:
                pct = float(text[:-1])
            except ValueError:
                return None
            if not math.isfinite(pct):
                return None
            return cls.percent(pct)
        if text.endswith("px"):
            text = text[:-2]
        if text.isdecimal():
            return cls.fixed(int(text))
        return None


@dataclass(frozen=True)
class Spacing:
    """Per-side cell counts for padding and margin."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def all(cls, value: int) -> Spacing:
        return cls(value, value, value, value)

    @classmethod
    def parse(cls, text: str) -> Spacing | None:
        """CSS shorthand: 1, 2, 3 or 4 whitespace-separated values."""
        tokens = text.split()
        values: list[int] = []
        for token in tokens:
            if token.endswith("px"):
                token = token[:-2]
            if not token.isdecimal():
                return None
            values.append(int(token))
        if len(values) == 1:
            return cls.all(values[0])
        if len(values) == 2:
            return cls(values[0], values[1], values[0], values[1])
        if len(values) == 3:
            return cls(values[0], values[1], values[2], values[1])
        if len(values) == 4:
            return cls(*values)
        return None


@dataclass
class Style:
    """Final visual style of a widget.

    A field equal to its default counts as "not set" when styles are merged,
    so there is no separate optional wrapper per property.
    """

    # layout
    display: Display = Display.FLEX
    position: Position = Position.STATIC
    flex_direction: FlexDirection = FlexDirection.ROW
    justify_content: JustifyContent = JustifyContent.START
    align_items: AlignItems = AlignItems.START
    gap: int = 0
    # sizing
    width: Size = Size()
    height: Size = Size()
    min_width: Size = Size()
    min_height: Size = Size()
    max_width: Size = Size()
    max_height: Size = Size()
    # spacing
    padding: Spacing = Spacing()
    margin: Spacing = Spacing()
    # visual
    color: Color = Color()
    background: Color = Color()
    border_style: BorderStyle = BorderStyle.NONE
    border_color: Color = Color()
    opacity: float = 1.0
    visible: bool = True

    @classmethod
    def default(cls) -> Style:
        return cls()

    @classmethod
    def inherit(
        cls, parent: Style, properties: Iterable[str] = INHERITED_PROPERTIES
    ) -> Style:
        """Start a child style: inheritable fields from *parent*, the rest default."""
        return cls(**{name: getattr(parent, name) for name in properties})

    def is_set(self, name: str) -> bool:
        """Return True if field *name* differs from its default."""
        return getattr(self, name) != _STYLE_DEFAULTS[name]

    def merge(self, other: Style) -> Style:
        """Return a copy of this style with every set field of *other* on top."""
        updates = {name: getattr(other, name) for name in _STYLE_DEFAULTS if other.is_set(name)}
        return replace(self, **updates)

    def copy(self) -> Style:
        return replace(self)


_STYLE_DEFAULTS: dict[str, object] = {f.name: f.default for f in fields(Style)}
STYLE_FIELDS: frozenset[str] = frozenset(_STYLE_DEFAULTS)
