from widgetcss.dom.ids import DEFAULT_GENERATOR, DomId, DomIdGenerator, next_dom_id
from widgetcss.dom.node import DomNode, NodeState, WidgetMeta
from widgetcss.dom.query import Query
from widgetcss.dom.tree import DomTree

__all__ = [
    "DEFAULT_GENERATOR",
    "DomId",
    "DomIdGenerator",
    "DomNode",
    "DomTree",
    "NodeState",
    "Query",
    "WidgetMeta",
    "next_dom_id",
]
