"""Tests for SelectorIndex candidate pruning."""

from widgetcss.cascade import SelectorIndex
from widgetcss.dom import DomTree, WidgetMeta
from widgetcss.selector import parse_selector


def build(*texts):
    return SelectorIndex.build([(parse_selector(t), i) for i, t in enumerate(texts)])


def node(widget_type, id=None, classes=()):
    tree = DomTree()
    return tree.get(tree.create_root(WidgetMeta(widget_type, id=id, classes=set(classes))))


class TestBuild:
    def test_keyed_on_target_part_only(self):
        index = build(".sidebar Button")
        assert index.by_element == {"Button": [0]}
        assert index.by_class == {}

    def test_key_priority(self):
        index = build("Button#ok.primary", "Button.primary", ".primary.large", ":focus", "*")
        assert index.by_id == {"ok": [0]}
        assert index.by_element == {"Button": [1]}
        assert index.by_class == {"primary": [2]}
        assert index.universal == [3, 4]
        assert len(index) == 5

    def test_attribute_only_is_universal(self):
        assert build("[disabled]").universal == [0]


class TestCandidates:
    def test_union_of_buckets(self):
        index = build("Button", ".primary", "#submit", "Label", ".other", "*")
        candidates = index.get_candidates(node("Button", id="submit", classes=["primary"]))
        assert sorted(candidates) == [0, 1, 2, 5]

    def test_no_duplicates(self):
        index = build(".a", ".b", "*")
        candidates = index.get_candidates(node("Box", classes=["a", "b"]))
        assert sorted(candidates) == [0, 1, 2]
        assert len(candidates) == len(set(candidates))

    def test_universal_always_candidate(self):
        index = build(":hover", "Label")
        assert index.get_candidates(node("Button")) == [0]

    def test_empty_index(self):
        assert SelectorIndex().get_candidates(node("Button")) == []
