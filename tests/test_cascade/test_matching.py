"""Tests for selector matching: parts, attributes, pseudo-classes, combinators."""

import pytest

from widgetcss.cascade.matching import (
    LookupNavigator,
    ancestors,
    matches,
    matches_attribute,
    matches_pseudo,
    preceding_siblings,
)
from widgetcss.dom import DomTree, WidgetMeta
from widgetcss.selector import parse_selector


def match(tree, selector, node_id):
    return matches(parse_selector(selector), tree.get(node_id), LookupNavigator(tree.get))


def attr(selector):
    return parse_selector(selector).target().attributes[0]


def pseudo(selector):
    return parse_selector(selector).target().pseudo_classes[0]


@pytest.fixture
def tree():
    return DomTree()


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_type_selector(self, tree):
        root = tree.create_root(WidgetMeta("Button"))
        assert match(tree, "Button", root)
        assert not match(tree, "Label", root)

    def test_child_combinator_direct_parent_only(self, tree):
        root = tree.create_root(WidgetMeta("App"))
        sidebar = tree.add_child(root, WidgetMeta("Panel", classes={"sidebar"}))
        direct = tree.add_child(sidebar, WidgetMeta("Button"))
        wrapper = tree.add_child(sidebar, WidgetMeta("Box"))
        nested = tree.add_child(wrapper, WidgetMeta("Button"))

        assert match(tree, ".sidebar > Button", direct)
        assert not match(tree, ".sidebar > Button", nested)
        assert match(tree, ".sidebar Button", nested)

    def test_adjacent_sibling(self, tree):
        root = tree.create_root(WidgetMeta("Form"))
        label = tree.add_child(root, WidgetMeta("Label"))
        first_input = tree.add_child(root, WidgetMeta("Input"))
        tree.add_child(root, WidgetMeta("Label"))
        tree.add_child(root, WidgetMeta("Hint"))
        late_input = tree.add_child(root, WidgetMeta("Input"))

        assert match(tree, "Label + Input", first_input)
        assert not match(tree, "Label + Input", late_input)
        assert not match(tree, "Label + Input", label)

    def test_general_sibling_retries_earlier_siblings(self, tree):
        root = tree.create_root(WidgetMeta("Form"))
        tree.add_child(root, WidgetMeta("Label"))
        tree.add_child(root, WidgetMeta("Hint"))
        target = tree.add_child(root, WidgetMeta("Input"))
        assert match(tree, "Label ~ Input", target)
        assert not match(tree, "Button ~ Input", target)

    def test_class_word_vs_substring(self, tree):
        root = tree.create_root(WidgetMeta("Button", classes={"primary", "large"}))
        assert match(tree, "[class~=primary]", root)
        assert not match(tree, "[class~=prim]", root)
        assert match(tree, "[class*=prim]", root)

    def test_nth_child(self, tree):
        root = tree.create_root(WidgetMeta("List"))
        items = [tree.add_child(root, WidgetMeta("Item")) for _ in range(4)]
        hits = [i for i in items if match(tree, ":nth-child(3)", i)]
        assert hits == [items[2]]
        assert tree.get(items[2]).state.child_index == 2


# ---------------------------------------------------------------------------
# Backtracking
# ---------------------------------------------------------------------------


class TestBacktracking:
    def test_descendant_skips_non_matching_ancestors(self, tree):
        root = tree.create_root(WidgetMeta("App", classes={"dark"}))
        a = tree.add_child(root, WidgetMeta("Box"))
        b = tree.add_child(a, WidgetMeta("Box"))
        leaf = tree.add_child(b, WidgetMeta("Label"))
        assert match(tree, ".dark Label", leaf)

    def test_descendant_then_child_needs_retry(self, tree):
        # The nearest Panel has no Screen parent; a farther one does.
        root = tree.create_root(WidgetMeta("Screen"))
        outer = tree.add_child(root, WidgetMeta("Panel"))
        box = tree.add_child(outer, WidgetMeta("Box"))
        inner = tree.add_child(box, WidgetMeta("Panel"))
        leaf = tree.add_child(inner, WidgetMeta("Label"))
        assert match(tree, "Screen > Panel Label", leaf)
        assert not match(tree, "Screen > Panel > Label", leaf)

    def test_general_sibling_then_descendant(self, tree):
        root = tree.create_root(WidgetMeta("App", classes={"wide"}))
        group = tree.add_child(root, WidgetMeta("Group"))
        tree.add_child(group, WidgetMeta("Title"))
        tree.add_child(group, WidgetMeta("Rule"))
        body = tree.add_child(group, WidgetMeta("Body"))
        assert match(tree, ".wide Title ~ Body", body)
        assert not match(tree, ".narrow Title ~ Body", body)

    def test_child_of_root_has_no_further_ancestor(self, tree):
        root = tree.create_root(WidgetMeta("Label"))
        assert not match(tree, "App Label", root)
        assert not match(tree, "App > Label", root)

    def test_retry_helpers(self, tree):
        root = tree.create_root(WidgetMeta("App"))
        a = tree.add_child(root, WidgetMeta("A"))
        b = tree.add_child(root, WidgetMeta("B"))
        c = tree.add_child(root, WidgetMeta("C"))
        leaf = tree.add_child(c, WidgetMeta("Leaf"))
        nav = LookupNavigator(tree.get)
        assert [n.id for n in ancestors(tree.get(leaf), nav)] == [c, root]
        assert [n.id for n in preceding_siblings(tree.get(c), nav)] == [b, a]
        assert list(preceding_siblings(tree.get(root), nav)) == []

    def test_sibling_navigation_follows_reorder(self, tree):
        root = tree.create_root(WidgetMeta("App"))
        a = tree.add_child(root, WidgetMeta("A"))
        b = tree.add_child(root, WidgetMeta("B"))
        c = tree.add_child(root, WidgetMeta("C"))
        tree.reorder_children(root, [c, a, b])
        for nav in (tree, LookupNavigator(tree.get)):
            assert nav.previous_sibling(tree.get(a)).id == c
            assert nav.previous_sibling(tree.get(c)) is None
            assert [n.id for n in preceding_siblings(tree.get(b), nav)] == [a, c]
        assert match(tree, "C ~ B", b)
        assert not match(tree, "B ~ C", c)

    def test_tree_is_its_own_navigator(self, tree):
        root = tree.create_root(WidgetMeta("App"))
        a = tree.add_child(root, WidgetMeta("A"))
        b = tree.add_child(root, WidgetMeta("B"))
        assert matches(parse_selector("App > A + B"), tree.get(b), tree)
        assert not matches(parse_selector("App > B + A"), tree.get(a), tree)


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


class TestParts:
    def test_universal_matches_everything(self, tree):
        root = tree.create_root(WidgetMeta(""))
        assert match(tree, "*", root)

    def test_universal_with_condition(self, tree):
        root = tree.create_root(WidgetMeta("Button", classes={"a"}))
        assert match(tree, "*.a", root)
        assert not match(tree, "*.b", root)

    def test_all_conditions_required(self, tree):
        root = tree.create_root(WidgetMeta("Button", id="ok", classes={"a", "b"}))
        assert match(tree, "Button#ok.a.b", root)
        assert not match(tree, "Button#ok.a.c", root)
        assert not match(tree, "Label#ok", root)
        assert not match(tree, "Button#no", root)

    def test_pseudo_state(self, tree):
        root = tree.create_root(WidgetMeta("Button"))
        assert not match(tree, "Button:focus", root)
        tree.set_focused(root)
        assert match(tree, "Button:focus", root)


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class TestAttributes:
    @pytest.fixture
    def node(self, tree):
        nid = tree.create_root(WidgetMeta("TextInput", id="user-name", classes={"en-US", "big"}))
        return tree.get(nid)

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("[class]", True),
            ('[class="big en-US"]', True),
            ("[class=big]", False),
            ("[class~=big]", True),
            ("[class^=bi]", True),
            ("[class$=US]", True),
            ("[class|=en]", True),
            ("[class|=e]", False),
            ("[class~=BIG i]", True),
            ("[class~=BIG]", False),
        ],
    )
    def test_class(self, node, selector, expected):
        assert matches_attribute(attr(selector), node) is expected

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("[id]", True),
            ("[id=user-name]", True),
            ("[id^=user]", True),
            ("[id$=name]", True),
            ("[id*=r-n]", True),
            ("[id=USER-NAME i]", True),
            ("[id~=user-name]", False),
            ("[id|=user]", False),
        ],
    )
    def test_id(self, node, selector, expected):
        assert matches_attribute(attr(selector), node) is expected

    def test_id_exists_without_id(self, tree):
        nid = tree.create_root(WidgetMeta("Box"))
        assert not matches_attribute(attr("[id]"), tree.get(nid))

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("[type]", True),
            ("[type=TextInput]", True),
            ("[type*=Input]", True),
            ("[type=textinput i]", True),
            ("[type^=Text]", False),
        ],
    )
    def test_type(self, node, selector, expected):
        assert matches_attribute(attr(selector), node) is expected

    @pytest.mark.parametrize(
        "selector, disabled, expected",
        [
            ("[disabled]", True, True),
            ("[disabled]", False, False),
            ("[disabled=true]", True, True),
            ("[disabled='1']", True, True),
            ("[disabled='']", True, True),
            ("[disabled=false]", True, False),
            ("[disabled=false]", False, True),
            ("[disabled=TRUE i]", True, True),
            ("[disabled^=t]", True, False),
        ],
    )
    def test_boolean_flags(self, node, selector, disabled, expected):
        node.state.disabled = disabled
        assert matches_attribute(attr(selector), node) is expected

    def test_checked_and_selected(self, node):
        node.state.checked = True
        assert matches_attribute(attr("[checked]"), node)
        assert not matches_attribute(attr("[selected]"), node)

    @pytest.mark.parametrize("name", ["focused", "focus"])
    def test_focus_exists_only(self, node, name):
        node.state.focused = True
        assert matches_attribute(attr(f"[{name}]"), node)
        assert not matches_attribute(attr(f"[{name}=true]"), node)

    @pytest.mark.parametrize("name", ["hovered", "hover"])
    def test_hover_exists_only(self, node, name):
        assert not matches_attribute(attr(f"[{name}]"), node)
        node.state.hovered = True
        assert matches_attribute(attr(f"[{name}]"), node)

    def test_unknown_attribute_never_matches(self, node):
        assert not matches_attribute(attr("[data-x]"), node)


# ---------------------------------------------------------------------------
# Pseudo-classes
# ---------------------------------------------------------------------------


class TestPseudoClasses:
    @pytest.fixture
    def items(self, tree):
        root = tree.create_root(WidgetMeta("List"))
        return tree, [tree.add_child(root, WidgetMeta("Item")) for _ in range(3)]

    def test_enabled_is_not_disabled(self, items):
        tree, ids = items
        node = tree.get(ids[0])
        assert matches_pseudo(pseudo(":enabled"), node)
        tree.set_state(ids[0], disabled=True)
        assert not matches_pseudo(pseudo(":enabled"), node)
        assert matches_pseudo(pseudo(":disabled"), node)

    def test_positions(self, items):
        tree, ids = items
        first, middle, last = (tree.get(i) for i in ids)
        assert matches_pseudo(pseudo(":first-child"), first)
        assert matches_pseudo(pseudo(":last-child"), last)
        assert not matches_pseudo(pseudo(":only-child"), middle)
        assert matches_pseudo(pseudo(":nth-last-child(1)"), last)
        assert matches_pseudo(pseudo(":nth-last-child(3)"), first)
        assert not matches_pseudo(pseudo(":nth-child(1)"), middle)

    def test_not(self, items):
        tree, ids = items
        first, middle, _ = (tree.get(i) for i in ids)
        assert not matches_pseudo(pseudo(":not(:first-child)"), first)
        assert matches_pseudo(pseudo(":not(:first-child)"), middle)

    @pytest.mark.parametrize(
        "flag, selector",
        [
            ("hovered", ":hover"),
            ("active", ":active"),
            ("checked", ":checked"),
            ("selected", ":selected"),
            ("empty", ":empty"),
        ],
    )
    def test_state_flags(self, items, flag, selector):
        tree, ids = items
        node = tree.get(ids[1])
        assert not matches_pseudo(pseudo(selector), node)
        tree.set_state(ids[1], **{flag: True})
        assert matches_pseudo(pseudo(selector), node)
