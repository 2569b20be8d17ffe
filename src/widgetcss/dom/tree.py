"""DomTree: arena of DomNodes with id, type and class indices.

The tree owns every node; nodes refer to their parent and children by
DomId only. Structural and metadata changes must go through the methods
here so that these stay true:

- every non-root node's parent lists it exactly once among its children;
- every index entry refers to a live node, and index membership matches
  the node's current element id, widget type and classes;
- each child's position flags match its place in the parent's child list.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from widgetcss.dom.ids import DEFAULT_GENERATOR, DomId, DomIdGenerator
from widgetcss.dom.node import DomNode, NodeState, WidgetMeta
from widgetcss.dom.query import Query
from widgetcss.style.model import Style

# NodeState flags that callers may set directly through set_state.
_SETTABLE_FLAGS = frozenset(
    {"focused", "hovered", "disabled", "selected", "checked", "active", "empty"}
)


class DomTree(Query):
    """Owns DomNodes keyed by DomId, plus the root and three secondary indices."""

    def __init__(self, generator: DomIdGenerator | None = None) -> None:
        self._generator = generator or DEFAULT_GENERATOR
        self._nodes: dict[DomId, DomNode] = {}
        self._root: DomId | None = None
        self._by_id: dict[str, DomId] = {}
        self._by_type: dict[str, list[DomId]] = {}
        self._by_class: dict[str, list[DomId]] = {}

    # ---- construction ----

    def create_root(self, meta: WidgetMeta) -> DomId:
        """Create the root node. An existing root and its subtree are removed."""
        if self._root is not None:
            self.remove(self._root)
        # The root has no siblings, so it keeps the zeroed position fields
        # and never matches the structural pseudo-classes.
        node = self._new_node(meta, parent=None)
        self._root = node.id
        return node.id

    def add_child(self, parent_id: DomId, meta: WidgetMeta) -> DomId:
        """Append a new child under *parent_id* and return its id.

        Raises:
            KeyError: if *parent_id* is not in the tree.
        """
        parent = self._nodes[parent_id]
        node = self._new_node(meta, parent=parent_id)
        parent.children.append(node.id)
        self._reposition_children(parent)
        return node.id

    def _new_node(self, meta: WidgetMeta, parent: DomId | None) -> DomNode:
        # Nodes never share a WidgetMeta with the caller.
        own = WidgetMeta(meta.widget_type, meta.id, set(meta.classes))
        node = DomNode(id=self._generator.next_id(), meta=own, parent=parent)
        node.state.dirty = True
        self._nodes[node.id] = node
        self._index(node)
        return node

    def remove(self, node_id: DomId) -> list[DomId]:
        """Remove a node and its whole subtree.

        Returns the removed ids (the node first), or an empty list if the id
        is unknown.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return []

        if node.parent is not None:
            parent = self._nodes.get(node.parent)
            if parent is not None:
                parent.children.remove(node_id)
                self._reposition_children(parent)

        removed = [node_id] + self.descendants(node_id)
        for rid in removed:
            self._unindex(self._nodes[rid])
        for rid in removed:
            del self._nodes[rid]

        if self._root == node_id:
            self._root = None
        return removed

    def reorder_children(self, parent_id: DomId, order: list[DomId]) -> None:
        """Replace the child order of *parent_id* with a permutation of it.

        Raises:
            ValueError: if *order* is not exactly the current children.
        """
        parent = self._nodes[parent_id]
        if sorted(order) != sorted(parent.children):
            raise ValueError(f"Child order for {parent_id} must list exactly its children")
        parent.children = list(order)
        self._reposition_children(parent)

    # ---- access ----

    def get(self, node_id: DomId) -> DomNode | None:
        return self._nodes.get(node_id)

    def root(self) -> DomNode | None:
        if self._root is None:
            return None
        return self._nodes.get(self._root)

    def root_id(self) -> DomId | None:
        return self._root

    def nodes(self) -> Iterator[DomNode]:
        """All nodes, in no particular order."""
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def is_empty(self) -> bool:
        return not self._nodes

    # ---- structure ----

    def parent_of(self, node: DomNode) -> DomNode | None:
        if node.parent is None:
            return None
        return self._nodes.get(node.parent)

    def previous_sibling(self, node: DomNode) -> DomNode | None:
        parent = self.parent_of(node)
        if parent is None:
            return None
        idx = node.state.child_index
        if idx == 0:
            return None
        return self._nodes.get(parent.children[idx - 1])

    def ancestors(self, node_id: DomId) -> Iterator[DomNode]:
        """Parent, grandparent, ... up to the root."""
        node = self._nodes.get(node_id)
        while node is not None and node.parent is not None:
            node = self._nodes.get(node.parent)
            if node is not None:
                yield node

    def descendants(self, node_id: DomId) -> list[DomId]:
        """Every id below *node_id*, in pre-order."""
        result: list[DomId] = []
        node = self._nodes.get(node_id)
        if node is None:
            return result
        stack = list(reversed(node.children))
        while stack:
            cid = stack.pop()
            result.append(cid)
            child = self._nodes.get(cid)
            if child is not None:
                stack.extend(reversed(child.children))
        return result

    def walk(self) -> Iterator[DomNode]:
        """Pre-order traversal from the root."""
        if self._root is None:
            return
        for nid in [self._root] + self.descendants(self._root):
            yield self._nodes[nid]

    # ---- metadata (keeps indices in step) ----

    def set_classes(self, node_id: DomId, classes: Iterable[str]) -> None:
        node = self._nodes[node_id]
        self._unindex(node)
        node.meta.classes = set(classes)
        self._index(node)
        self._invalidate(node_id)

    def add_class(self, node_id: DomId, name: str) -> None:
        node = self._nodes[node_id]
        if name not in node.meta.classes:
            self.set_classes(node_id, node.meta.classes | {name})

    def remove_class(self, node_id: DomId, name: str) -> None:
        node = self._nodes[node_id]
        if name in node.meta.classes:
            self.set_classes(node_id, node.meta.classes - {name})

    def set_element_id(self, node_id: DomId, element_id: str | None) -> None:
        node = self._nodes[node_id]
        self._unindex(node)
        node.meta.id = element_id
        self._index(node)
        self._invalidate(node_id)

    def set_inline_style(self, node_id: DomId, style: Style | None) -> None:
        self._nodes[node_id].inline_style = style
        self.mark_dirty(node_id)

    # ---- state ----

    def set_state(self, node_id: DomId, **flags: bool) -> None:
        """Set interaction flags, e.g. ``set_state(nid, disabled=True)``."""
        unknown = set(flags) - _SETTABLE_FLAGS
        if unknown:
            raise ValueError(f"Unknown state flag(s): {', '.join(sorted(unknown))}")
        node = self._nodes[node_id]
        for name, value in flags.items():
            setattr(node.state, name, value)
        self._invalidate(node_id)

    def replace_state(self, node_id: DomId, state: NodeState) -> None:
        """Swap in a whole NodeState, keeping the node's position fields."""
        node = self._nodes[node_id]
        state.update_position(node.state.child_index, node.state.sibling_count)
        node.state = state
        self._invalidate(node_id)

    def mark_dirty(self, node_id: DomId) -> None:
        """Mark a node and its subtree dirty; inherited values flow downward."""
        if node_id not in self._nodes:
            return
        for nid in [node_id] + self.descendants(node_id):
            self._nodes[nid].state.dirty = True

    def _invalidate(self, node_id: DomId) -> None:
        # Sibling combinators let a node's identity and state affect the
        # nodes after it, so those subtrees go stale too.
        self.mark_dirty(node_id)
        node = self._nodes[node_id]
        parent = self.parent_of(node)
        if parent is None:
            return
        for sibling in parent.children[parent.children.index(node_id) + 1 :]:
            self.mark_dirty(sibling)

    def get_dirty_nodes(self) -> list[DomId]:
        return [node.id for node in self._nodes.values() if node.state.dirty]

    def clear_dirty_flags(self) -> None:
        for node in self._nodes.values():
            node.state.dirty = False

    def set_focused(self, node_id: DomId | None) -> None:
        """Give focus to at most one node; every node whose flag flips is dirtied."""
        self._set_single_owner("focused", node_id)

    def set_hovered(self, node_id: DomId | None) -> None:
        self._set_single_owner("hovered", node_id)

    def _set_single_owner(self, flag: str, node_id: DomId | None) -> None:
        for node in self._nodes.values():
            if getattr(node.state, flag) and node.id != node_id:
                setattr(node.state, flag, False)
                self._invalidate(node.id)
        target = self._nodes.get(node_id) if node_id is not None else None
        if target is not None and not getattr(target.state, flag):
            setattr(target.state, flag, True)
            self._invalidate(target.id)

    # ---- indices ----

    def _index(self, node: DomNode) -> None:
        if node.meta.id:
            self._by_id[node.meta.id] = node.id
        self._by_type.setdefault(node.meta.widget_type, []).append(node.id)
        for name in node.meta.classes:
            self._by_class.setdefault(name, []).append(node.id)

    def _unindex(self, node: DomNode) -> None:
        if node.meta.id and self._by_id.get(node.meta.id) == node.id:
            del self._by_id[node.meta.id]
        _discard(self._by_type, node.meta.widget_type, node.id)
        for name in node.meta.classes:
            _discard(self._by_class, name, node.id)

    def _reposition_children(self, parent: DomNode) -> None:
        total = len(parent.children)
        for idx, cid in enumerate(parent.children):
            child = self._nodes[cid]
            before = (child.state.child_index, child.state.sibling_count)
            child.state.update_position(idx, total)
            if (idx, total) != before:
                self.mark_dirty(cid)

    def lookup_element_id(self, element_id: str) -> DomId | None:
        return self._by_id.get(element_id)

    def lookup_type(self, widget_type: str) -> list[DomId]:
        return list(self._by_type.get(widget_type, ()))

    def lookup_class(self, name: str) -> list[DomId]:
        return list(self._by_class.get(name, ()))


def _discard(index: dict[str, list[DomId]], key: str, node_id: DomId) -> None:
    ids = index.get(key)
    if ids is None:
        return
    if node_id in ids:
        ids.remove(node_id)
    if not ids:
        del index[key]
