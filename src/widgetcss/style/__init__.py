from widgetcss.style.declarations import SUPPORTED_PROPERTIES, apply_declaration
from widgetcss.style.errors import StyleSheetError
from widgetcss.style.loader import load_stylesheet, parse_stylesheet
from widgetcss.style.model import (
    INHERITED_PROPERTIES,
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
from widgetcss.style.sheet import Declaration, Rule, StyleSheet

__all__ = [
    "INHERITED_PROPERTIES",
    "SUPPORTED_PROPERTIES",
    "AlignItems",
    "BorderStyle",
    "Color",
    "Declaration",
    "Display",
    "FlexDirection",
    "JustifyContent",
    "Position",
    "Rule",
    "Size",
    "Spacing",
    "Style",
    "StyleSheet",
    "StyleSheetError",
    "apply_declaration",
    "load_stylesheet",
    "parse_stylesheet",
]
