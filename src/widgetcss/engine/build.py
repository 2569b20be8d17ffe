"""Reconcile a View hierarchy into a DomTree.

A first build creates every node. Later builds reuse what they can so that
unchanged nodes keep their ids, their cached styles and their clean flag:

- a child view with an element id reuses the old child with that id;
- a child view without one reuses the old child at the same position when
  that child has no element id and the widget types agree;
- a reused node whose classes changed is updated (which dirties it);
- anything unmatched is created, and old children left over are removed.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from widgetcss.dom.ids import DomId
from widgetcss.dom.node import WidgetMeta
from widgetcss.dom.tree import DomTree

__all__ = ["View", "build_children", "reconcile_children", "update_meta"]


class View(Protocol):
    """Anything that describes a widget and its child widgets."""

    def meta(self) -> WidgetMeta: ...

    def children(self) -> Sequence[View]: ...


# Called with every id removed from the tree during a rebuild.
Evict = Callable[[DomId], None]


def build_children(tree: DomTree, parent_id: DomId, children: Sequence[View]) -> None:
    """Create nodes for *children* (and their subtrees) under *parent_id*."""
    for child in children:
        child_id = tree.add_child(parent_id, child.meta())
        build_children(tree, child_id, child.children())


def update_meta(tree: DomTree, node_id: DomId, meta: WidgetMeta) -> bool:
    """Bring a node's classes in line with *meta*.

    Returns False, changing nothing, when the node cannot stand in for
    *meta* because its widget type or element id differ.
    """
    node = tree.get(node_id)
    if node is None:
        return False
    if node.widget_type != meta.widget_type or node.element_id != meta.id:
        return False
    if node.classes != meta.classes:
        tree.set_classes(node_id, meta.classes)
    return True


def reconcile_children(
    tree: DomTree, parent_id: DomId, views: Sequence[View], evict: Evict
) -> None:
    """Make the children of *parent_id* mirror *views*, reusing nodes."""
    parent = tree.get(parent_id)
    old_children = list(parent.children) if parent is not None else []

    old_by_id: dict[str, DomId] = {}
    for child_id in old_children:
        child = tree.get(child_id)
        if child is not None and child.element_id is not None:
            old_by_id[child.element_id] = child_id

    matched: set[DomId] = set()
    new_order: list[DomId] = []

    for pos, view in enumerate(views):
        meta = view.meta()
        candidate = _find_reusable(tree, meta, pos, old_children, old_by_id)

        if candidate is not None and candidate not in matched:
            matched.add(candidate)
            if update_meta(tree, candidate, meta):
                reconcile_children(tree, candidate, view.children(), evict)
                new_order.append(candidate)
                continue
            _remove(tree, candidate, evict)

        child_id = tree.add_child(parent_id, meta)
        build_children(tree, child_id, view.children())
        new_order.append(child_id)

    for old_id in old_children:
        if old_id not in matched and old_id in tree:
            _remove(tree, old_id, evict)

    tree.reorder_children(parent_id, new_order)


def _find_reusable(
    tree: DomTree,
    meta: WidgetMeta,
    pos: int,
    old_children: list[DomId],
    old_by_id: dict[str, DomId],
) -> DomId | None:
    if meta.id is not None:
        return old_by_id.get(meta.id)
    if pos >= len(old_children):
        return None
    old = tree.get(old_children[pos])
    if old is None or old.element_id is not None or old.widget_type != meta.widget_type:
        return None
    return old.id


def _remove(tree: DomTree, node_id: DomId, evict: Evict) -> None:
    for removed in tree.remove(node_id):
        evict(removed)
