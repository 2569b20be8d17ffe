"""Whole-tree queries mixed into DomTree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from widgetcss.cascade.matching import matches
from widgetcss.selector.parser import parse_selector

if TYPE_CHECKING:
    from widgetcss.dom.ids import DomId
    from widgetcss.dom.node import DomNode

__all__ = ["Query"]


class Query:
    """Selector and index lookups over every node of the tree.

    The host class supplies ``walk``, ``get``, ``parent_of``,
    ``previous_sibling`` and the three ``lookup_*`` index accessors, and is
    itself the navigator used to resolve combinators.
    """

    def walk(self) -> Iterator[DomNode]:
        raise NotImplementedError

    def get(self, node_id: DomId) -> DomNode | None:
        raise NotImplementedError

    def lookup_element_id(self, element_id: str) -> DomId | None:
        raise NotImplementedError

    def lookup_type(self, widget_type: str) -> list[DomId]:
        raise NotImplementedError

    def lookup_class(self, name: str) -> list[DomId]:
        raise NotImplementedError

    # ---- selector queries ----

    def query_all(self, selector: str) -> list[DomNode]:
        """Every node matching *selector*, in document (pre-)order.

        Raises:
            SelectorSyntaxError: if *selector* does not parse.
        """
        parsed = parse_selector(selector)
        return [node for node in self.walk() if matches(parsed, node, self)]  # type: ignore[arg-type]

    def query_one(self, selector: str) -> DomNode | None:
        """First node matching *selector* in document order, or None."""
        parsed = parse_selector(selector)
        for node in self.walk():
            if matches(parsed, node, self):  # type: ignore[arg-type]
                return node
        return None

    # ---- index lookups ----

    def get_by_id(self, element_id: str) -> DomNode | None:
        node_id = self.lookup_element_id(element_id)
        if node_id is None:
            return None
        return self.get(node_id)

    def get_by_type(self, widget_type: str) -> list[DomNode]:
        return self._resolve(self.lookup_type(widget_type))

    def get_by_class(self, name: str) -> list[DomNode]:
        return self._resolve(self.lookup_class(name))

    def _resolve(self, ids: list[DomId]) -> list[DomNode]:
        nodes = []
        for node_id in ids:
            node = self.get(node_id)
            if node is not None:
                nodes.append(node)
        return nodes
