"""Apply one ``property: value`` declaration to a Style."""

from __future__ import annotations

import math
import re
from dataclasses import replace
from enum import Enum
from typing import Callable, Mapping

from widgetcss.style.model import (
    AlignItems,
    BorderStyle,
    Color,
    Display,
    FlexDirection,
    JustifyContent,
    Position,
    Size,
    Spacing,
    Style,
)

__all__ = ["apply_declaration", "resolve_variables", "SUPPORTED_PROPERTIES"]

_VAR_RE = re.compile(r"^var\(\s*(--[A-Za-z0-9_-]+)\s*(?:,\s*(?P<fallback>.+?))?\s*\)$")

# Extra spellings accepted for enum-valued properties.
_ENUM_ALIASES: dict[str, str] = {
    "flex-start": "start",
    "flex-end": "end",
}


def resolve_variables(value: str, variables: Mapping[str, str]) -> str:
    """Substitute ``var(--name)`` / ``var(--name, fallback)``.

    An unknown variable without a fallback leaves the value untouched, which
    then fails coercion and is ignored.
    """
    m = _VAR_RE.match(value.strip())
    if not m:
        return value
    name = m.group(1)
    if name in variables:
        return variables[name]
    if m.group("fallback") is not None:
        return m.group("fallback")
    return value


def _enum(enum_type: type[Enum]) -> Callable[[str], object | None]:
    def coerce(raw: str) -> object | None:
        raw = raw.strip().lower()
        raw = _ENUM_ALIASES.get(raw, raw)
        try:
            return enum_type(raw)
        except ValueError:
            return None

    return coerce


def _non_negative_int(raw: str) -> int | None:
    raw = raw.strip()
    if raw.endswith("px"):
        raw = raw[:-2]
    return int(raw) if raw.isdecimal() else None


def _opacity(raw: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return min(max(value, 0.0), 1.0)


def _visibility(raw: str) -> bool | None:
    raw = raw.strip().lower()
    if raw == "visible":
        return True
    if raw == "hidden":
        return False
    return None


# property name -> (Style field, coercer returning None for invalid input)
_PROPERTIES: dict[str, tuple[str, Callable[[str], object | None]]] = {
    "display": ("display", _enum(Display)),
    "position": ("position", _enum(Position)),
    "flex-direction": ("flex_direction", _enum(FlexDirection)),
    "justify-content": ("justify_content", _enum(JustifyContent)),
    "align-items": ("align_items", _enum(AlignItems)),
    "gap": ("gap", _non_negative_int),
    "width": ("width", Size.parse),
    "height": ("height", Size.parse),
    "min-width": ("min_width", Size.parse),
    "min-height": ("min_height", Size.parse),
    "max-width": ("max_width", Size.parse),
    "max-height": ("max_height", Size.parse),
    "padding": ("padding", Spacing.parse),
    "margin": ("margin", Spacing.parse),
    "color": ("color", Color.parse),
    "background": ("background", Color.parse),
    "background-color": ("background", Color.parse),
    "border-style": ("border_style", _enum(BorderStyle)),
    "border-color": ("border_color", Color.parse),
    "opacity": ("opacity", _opacity),
    "visibility": ("visible", _visibility),
}

_SIDES = ("top", "right", "bottom", "left")

SUPPORTED_PROPERTIES: frozenset[str] = frozenset(
    list(_PROPERTIES)
    + [f"{box}-{side}" for box in ("padding", "margin") for side in _SIDES]
    + ["border"]
)


def _apply_side(style: Style, property: str, value: str) -> bool:
    box, _, side = property.partition("-")
    cells = _non_negative_int(value)
    if cells is None:
        return False
    setattr(style, box, replace(getattr(style, box), **{side: cells}))
    return True


def _apply_border(style: Style, value: str) -> bool:
    """``border: <style> [<color>]``."""
    tokens = value.split(None, 1)
    if not tokens:
        return False
    border_style = _enum(BorderStyle)(tokens[0])
    if border_style is None:
        return False
    color = None
    if len(tokens) == 2:
        color = Color.parse(tokens[1])
        if color is None:
            return False
    style.border_style = border_style
    if color is not None:
        style.border_color = color
    return True


def apply_declaration(
    style: Style, property: str, value: str, variables: Mapping[str, str]
) -> bool:
    """Apply a single declaration to *style* in place.

    Returns False (leaving *style* unchanged) for unknown properties and
    values that cannot be coerced.
    """
    property = property.strip().lower()
    value = resolve_variables(value, variables).strip()

    if property in _PROPERTIES:
        field_name, coerce = _PROPERTIES[property]
        coerced = coerce(value)
        if coerced is None:
            return False
        setattr(style, field_name, coerced)
        return True

    box, _, side = property.partition("-")
    if box in ("padding", "margin") and side in _SIDES:
        return _apply_side(style, property, value)

    if property == "border":
        return _apply_border(style, value)

    return False
