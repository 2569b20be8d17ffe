from widgetcss.cascade.index import SelectorIndex
from widgetcss.cascade.matching import (
    LookupNavigator,
    Navigator,
    matches,
    matches_attribute,
    matches_part,
    matches_pseudo,
)
from widgetcss.cascade.resolver import (
    DroppedRule,
    MatchedRule,
    StyleResolver,
    parse_rule_selectors,
)

__all__ = [
    "DroppedRule",
    "LookupNavigator",
    "MatchedRule",
    "Navigator",
    "SelectorIndex",
    "StyleResolver",
    "matches",
    "matches_attribute",
    "matches_part",
    "matches_pseudo",
    "parse_rule_selectors",
]
