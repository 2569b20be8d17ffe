"""StyleEngine: a DomTree, a stylesheet, and a cache of computed styles.

Cached entries are trusted only while their node is clean. Tree mutations
mark the affected nodes dirty, and the engine recomputes a dirty node's
style on the next request instead of serving the cached one. Replacing or
editing the stylesheet drops every cached style and the parsed selectors.
"""

from __future__ import annotations

import logging
from typing import Callable

from widgetcss.cascade.resolver import StyleResolver
from widgetcss.config import EngineConfig
from widgetcss.dom.ids import DomId
from widgetcss.dom.node import DomNode, WidgetMeta
from widgetcss.dom.tree import DomTree
from widgetcss.engine.build import View, build_children, reconcile_children, update_meta
from widgetcss.style.model import Style
from widgetcss.style.sheet import StyleSheet

__all__ = ["StyleEngine"]

logger = logging.getLogger(__name__)


class StyleEngine:
    """Owns the tree and keeps computed styles in step with it."""

    def __init__(
        self, stylesheet: StyleSheet | None = None, config: EngineConfig | None = None
    ) -> None:
        self.config = config or EngineConfig()
        self.tree = DomTree()
        self._stylesheet = stylesheet if stylesheet is not None else StyleSheet()
        self._styles: dict[DomId, Style] = {}
        self._resolver: StyleResolver | None = None
        self._focused: DomId | None = None
        self._hovered: DomId | None = None

    # ---- stylesheet ----

    @property
    def stylesheet(self) -> StyleSheet:
        return self._stylesheet

    def set_stylesheet(self, stylesheet: StyleSheet) -> None:
        """Swap in a new stylesheet; every cached style is dropped."""
        self._stylesheet = stylesheet
        self._reset_cascade()
        logger.debug("Stylesheet replaced: %d rules", len(stylesheet.rules))

    def edit_stylesheet(self) -> StyleSheet:
        """Return the stylesheet for in-place edits.

        Cached selectors and styles are dropped up front, since the caller
        may change anything.
        """
        self._reset_cascade()
        return self._stylesheet

    def _reset_cascade(self) -> None:
        self._resolver = None
        self._styles.clear()
        for node in self.tree.nodes():
            node.computed_style = None

    def resolver(self) -> StyleResolver:
        """Resolver over the current stylesheet, with selectors parsed once."""
        if self._resolver is None:
            self._resolver = StyleResolver(self._stylesheet, config=self.config)
        return self._resolver

    # ---- cache ----

    def invalidate_styles(self, node_id: DomId | None = None) -> None:
        """Drop cached styles for one subtree, or for the whole tree."""
        if node_id is None:
            self._styles.clear()
            for node in self.tree.nodes():
                node.computed_style = None
                node.state.dirty = True
            logger.debug("Invalidated all cached styles")
            return
        if node_id not in self.tree:
            return
        for nid in [node_id] + self.tree.descendants(node_id):
            self._evict(nid)
        self.tree.mark_dirty(node_id)

    def cached_style(self, node_id: DomId) -> Style | None:
        """The cached style for *node_id*, even if its node has gone dirty."""
        return self._styles.get(node_id)

    def _evict(self, node_id: DomId) -> None:
        self._styles.pop(node_id, None)
        node = self.tree.get(node_id)
        if node is not None:
            node.computed_style = None

    def _fresh(self, node: DomNode) -> Style | None:
        if node.state.dirty:
            return None
        return self._styles.get(node.id)

    def _store(self, node: DomNode, style: Style) -> None:
        self._styles[node.id] = style
        node.computed_style = style
        node.state.dirty = False

    # ---- resolution ----

    def style_for(self, node_id: DomId) -> Style | None:
        """Computed style for a node, without inheritance. None if unknown."""
        node = self.tree.get(node_id)
        if node is None:
            return None
        cached = self._fresh(node)
        if cached is not None:
            return cached.copy()
        style = self.resolver().compute_style(node, self.tree.get)
        self._store(node, style)
        return style.copy()

    def style_for_with_inheritance(self, node_id: DomId) -> Style | None:
        """Computed style for a node, inheriting from its (computed) parent."""
        node = self.tree.get(node_id)
        if node is None:
            return None
        cached = self._fresh(node)
        if cached is not None:
            return cached.copy()
        parent_style = None
        if node.parent is not None:
            self.style_for_with_inheritance(node.parent)
            parent_style = self._styles.get(node.parent)
        style = self.resolver().compute_style_with_parent(node, parent_style, self.tree.get)
        self._store(node, style)
        return style.copy()

    def compute_styles(self) -> int:
        """Bring every node's style up to date; returns how many were computed."""
        if self.config.inheritance:
            return self.compute_styles_with_inheritance()
        computed = 0
        for node in self.tree.nodes():
            if self._fresh(node) is None:
                self.style_for(node.id)
                computed += 1
        logger.debug("Computed %d styles", computed)
        return computed

    def compute_styles_with_inheritance(self) -> int:
        """Recompute styles top-down from the root.

        A clean node with a cached style is not recomputed, and its subtree
        is only entered when some node below it is dirty.
        """
        root = self.tree.root()
        if root is None:
            return 0

        dirty_paths: set[DomId] = set()
        for nid in self.tree.get_dirty_nodes():
            for ancestor in self.tree.ancestors(nid):
                if ancestor.id in dirty_paths:
                    break
                dirty_paths.add(ancestor.id)

        resolver = self.resolver()
        computed = 0
        stack = [root]
        while stack:
            node = stack.pop()
            if self._fresh(node) is not None:
                if node.id not in dirty_paths:
                    continue
            else:
                parent_style = None
                if node.parent is not None:
                    parent_style = self._styles.get(node.parent)
                style = resolver.compute_style_with_parent(node, parent_style, self.tree.get)
                self._store(node, style)
                computed += 1
            for cid in reversed(node.children):
                child = self.tree.get(cid)
                if child is not None:
                    stack.append(child)

        logger.debug("Computed %d styles with inheritance", computed)
        return computed

    # ---- interaction state ----

    def set_focus(self, element_id: str | None) -> None:
        """Move focus to the node with *element_id*, or clear it with None."""
        self._focused = self._move_owner(self.tree.set_focused, self._focused, element_id)

    def set_hover(self, element_id: str | None) -> None:
        self._hovered = self._move_owner(self.tree.set_hovered, self._hovered, element_id)

    def _move_owner(
        self,
        assign: Callable[[DomId | None], None],
        current: DomId | None,
        element_id: str | None,
    ) -> DomId | None:
        new = self.tree.lookup_element_id(element_id) if element_id is not None else None
        assign(new)
        if new != current:
            for nid in (current, new):
                if nid is not None:
                    self._evict(nid)
        return new

    # ---- structure ----

    def build_tree(self, root_meta: WidgetMeta, children: list[WidgetMeta]) -> DomId:
        """Replace the tree with a root and one level of children."""
        self._reset_tree()
        root_id = self.tree.create_root(root_meta)
        for meta in children:
            self.tree.add_child(root_id, meta)
        return root_id

    def build(self, view: View) -> DomId:
        """Build or incrementally update the tree from a View hierarchy."""
        root_id = self.tree.root_id()
        if root_id is not None and update_meta(self.tree, root_id, view.meta()):
            reconcile_children(self.tree, root_id, view.children(), self._evict)
            return root_id
        self._reset_tree()
        root_id = self.tree.create_root(view.meta())
        build_children(self.tree, root_id, view.children())
        return root_id

    def invalidate(self) -> None:
        """Forget the tree so the next build() starts from scratch."""
        self._reset_tree()

    def _reset_tree(self) -> None:
        self.tree = DomTree()
        self._styles.clear()
        self._focused = None
        self._hovered = None

    def remove(self, node_id: DomId) -> list[DomId]:
        """Remove a subtree and its cached styles."""
        removed = self.tree.remove(node_id)
        for nid in removed:
            self._styles.pop(nid, None)
        return removed

    # ---- queries ----

    def query(self, selector: str) -> list[DomNode]:
        return self.tree.query_all(selector)

    def query_one(self, selector: str) -> DomNode | None:
        return self.tree.query_one(selector)

    def get_by_id(self, element_id: str) -> DomNode | None:
        return self.tree.get_by_id(element_id)
