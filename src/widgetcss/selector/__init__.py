from widgetcss.selector.errors import SelectorSyntaxError
from widgetcss.selector.model import (
    AttributeOp,
    AttributeSelector,
    Combinator,
    PseudoClass,
    PseudoKind,
    Selector,
    SelectorPart,
)
from widgetcss.selector.parser import parse_selector, parse_selectors
from widgetcss.selector.specificity import Specificity

__all__ = [
    "AttributeOp",
    "AttributeSelector",
    "Combinator",
    "PseudoClass",
    "PseudoKind",
    "Selector",
    "SelectorPart",
    "SelectorSyntaxError",
    "Specificity",
    "parse_selector",
    "parse_selectors",
]
