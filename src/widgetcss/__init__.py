"""widgetcss - CSS-like styling core for terminal widget trees."""

__version__ = "0.3.0"

from widgetcss.cascade import MatchedRule, StyleResolver
from widgetcss.config import EngineConfig
from widgetcss.dom import DomId, DomNode, DomTree, NodeState, WidgetMeta
from widgetcss.engine import StyleEngine
from widgetcss.selector import (
    Selector,
    SelectorSyntaxError,
    Specificity,
    parse_selector,
    parse_selectors,
)
from widgetcss.style import Declaration, Rule, Style, StyleSheet, parse_stylesheet

__all__ = [
    "__version__",
    "Declaration",
    "DomId",
    "DomNode",
    "DomTree",
    "EngineConfig",
    "MatchedRule",
    "NodeState",
    "Rule",
    "Selector",
    "SelectorSyntaxError",
    "Specificity",
    "Style",
    "StyleEngine",
    "StyleResolver",
    "StyleSheet",
    "WidgetMeta",
    "parse_selector",
    "parse_selectors",
    "parse_stylesheet",
]
