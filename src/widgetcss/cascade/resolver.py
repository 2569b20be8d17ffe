"""StyleResolver: match stylesheet rules against a node and run the cascade.

The cascade for one node, lowest priority first:

1. the starting style (default, or inherited from the parent);
2. normal declarations of every matched rule, in ascending specificity;
3. the node's inline style;
4. ``!important`` declarations of every matched rule, in ascending
   specificity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from widgetcss.cascade.index import SelectorIndex
from widgetcss.cascade.matching import LookupNavigator, matches
from widgetcss.config import EngineConfig
from widgetcss.selector.errors import SelectorSyntaxError
from widgetcss.selector.model import Selector
from widgetcss.selector.parser import parse_selectors
from widgetcss.selector.specificity import Specificity
from widgetcss.style.declarations import apply_declaration
from widgetcss.style.model import Style
from widgetcss.style.sheet import Rule, StyleSheet

if TYPE_CHECKING:
    from widgetcss.dom.ids import DomId
    from widgetcss.dom.node import DomNode

__all__ = [
    "DroppedRule",
    "MatchedRule",
    "StyleResolver",
    "parse_rule_selectors",
]

logger = logging.getLogger(__name__)

NodeLookup = Callable[["DomId"], "DomNode | None"]


@dataclass(frozen=True)
class MatchedRule:
    """A rule whose selector matched, with the specificity it matched at."""

    selector: Selector
    rule: Rule
    specificity: Specificity


@dataclass(frozen=True)
class DroppedRule:
    """A rule left out of the cascade because its selector did not parse."""

    rule_index: int
    selector: str
    error: SelectorSyntaxError


def parse_rule_selectors(
    stylesheet: StyleSheet,
) -> tuple[list[tuple[Selector, int]], list[DroppedRule]]:
    """Parse every rule's selector text.

    A rule may carry a comma-separated group; each selector in it is paired
    with the rule's index. Rules whose text fails to parse are returned
    separately and contribute no selectors.
    """
    selectors: list[tuple[Selector, int]] = []
    dropped: list[DroppedRule] = []
    for idx, rule in enumerate(stylesheet.rules):
        try:
            parsed = parse_selectors(rule.selector)
        except SelectorSyntaxError as e:
            dropped.append(DroppedRule(rule_index=idx, selector=rule.selector, error=e))
            continue
        selectors.extend((selector, idx) for selector in parsed)
    return selectors, dropped


class StyleResolver:
    """Computes styles for nodes against one stylesheet.

    Holds no mutable state after construction; the same resolver can be used
    for any number of nodes as long as the stylesheet is not edited.
    """

    def __init__(
        self,
        stylesheet: StyleSheet,
        selectors: Sequence[tuple[Selector, int]] | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.stylesheet = stylesheet
        self.config = config or EngineConfig()
        if selectors is None:
            parsed, dropped = parse_rule_selectors(stylesheet)
            if self.config.log_dropped_selectors:
                for d in dropped:
                    logger.warning(
                        "Dropping rule %d: invalid selector %r (%s)",
                        d.rule_index,
                        d.selector,
                        d.error,
                    )
            selectors = parsed
        self.selectors: list[tuple[Selector, int]] = list(selectors)
        self.index = SelectorIndex.build(self.selectors)
        logger.debug("StyleResolver ready: %d active selectors", len(self.selectors))

    @classmethod
    def with_cached_selectors(
        cls,
        stylesheet: StyleSheet,
        selectors: Sequence[tuple[Selector, int]],
        config: EngineConfig | None = None,
    ) -> StyleResolver:
        """Build a resolver over selectors parsed earlier from *stylesheet*."""
        return cls(stylesheet, selectors=selectors, config=config)

    # ---- matching ----

    def match_node(self, node: DomNode, lookup: NodeLookup) -> list[MatchedRule]:
        """Rules matching *node*, sorted by ascending specificity.

        *lookup* resolves the DomIds of the node's ancestors and siblings.
        """
        nav = LookupNavigator(lookup)
        matched: list[MatchedRule] = []
        for position in self.index.get_candidates(node):
            selector, rule_idx = self.selectors[position]
            if matches(selector, node, nav):
                matched.append(
                    MatchedRule(
                        selector=selector,
                        rule=self.stylesheet.rules[rule_idx],
                        specificity=Specificity.of(selector, rule_idx),
                    )
                )
        matched.sort(key=lambda m: m.specificity)
        return matched

    # ---- cascade ----

    def compute_style(self, node: DomNode, lookup: NodeLookup) -> Style:
        """Cascade result for *node*, starting from the default style."""
        return self._cascade(Style.default(), node, lookup)

    def compute_style_with_parent(
        self, node: DomNode, parent_style: Style | None, lookup: NodeLookup
    ) -> Style:
        """Like compute_style, but inheritable properties start from *parent_style*."""
        if parent_style is None:
            base = Style.default()
        else:
            base = Style.inherit(parent_style, self.config.inherited_properties)
        return self._cascade(base, node, lookup)

    def _cascade(self, style: Style, node: DomNode, lookup: NodeLookup) -> Style:
        matched = self.match_node(node, lookup)

        for m in matched:
            self._apply(style, m.rule, important=False)

        if node.inline_style is not None:
            style = style.merge(node.inline_style)

        # Matched order is still ascending once every entry is flagged
        # important, so no re-sort is needed.
        for m in matched:
            self._apply(style, m.rule, important=True)

        return style

    def _apply(self, style: Style, rule: Rule, important: bool) -> None:
        variables = self.stylesheet.variables
        for decl in rule.declarations:
            if decl.important == important:
                apply_declaration(style, decl.property, decl.value, variables)
