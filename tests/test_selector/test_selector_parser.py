"""Tests for the hand-written selector parser."""

import pytest

from widgetcss.selector import (
    AttributeOp,
    AttributeSelector,
    Combinator,
    PseudoClass,
    PseudoKind,
    Selector,
    SelectorPart,
    SelectorSyntaxError,
    parse_selector,
    parse_selectors,
)


# ---------------------------------------------------------------------------
# Simple parts
# ---------------------------------------------------------------------------


class TestSimpleParts:
    def test_element(self):
        sel = parse_selector("Button")
        assert len(sel.parts) == 1
        part, combinator = sel.parts[0]
        assert part.element == "Button"
        assert combinator is None

    def test_id(self):
        part = parse_selector("#submit").target()
        assert part.id == "submit"
        assert part.element is None

    def test_class(self):
        part = parse_selector(".primary").target()
        assert part.classes == ["primary"]

    def test_universal(self):
        part = parse_selector("*").target()
        assert part.universal
        assert part.is_universal_only()

    def test_compound(self):
        part = parse_selector("Button#submit.primary.large").target()
        assert part.element == "Button"
        assert part.id == "submit"
        assert part.classes == ["primary", "large"]

    def test_names_with_dashes_and_underscores(self):
        part = parse_selector("my_widget.is-active").target()
        assert part.element == "my_widget"
        assert part.classes == ["is-active"]

    def test_surrounding_whitespace_ignored(self):
        sel = parse_selector("   Button   ")
        assert len(sel.parts) == 1
        assert sel.target().element == "Button"


# ---------------------------------------------------------------------------
# Pseudo-classes
# ---------------------------------------------------------------------------


class TestPseudoClasses:
    @pytest.mark.parametrize(
        "text, kind",
        [
            (":focus", PseudoKind.FOCUS),
            (":hover", PseudoKind.HOVER),
            (":active", PseudoKind.ACTIVE),
            (":disabled", PseudoKind.DISABLED),
            (":enabled", PseudoKind.ENABLED),
            (":checked", PseudoKind.CHECKED),
            (":selected", PseudoKind.SELECTED),
            (":empty", PseudoKind.EMPTY),
            (":first-child", PseudoKind.FIRST_CHILD),
            (":last-child", PseudoKind.LAST_CHILD),
            (":only-child", PseudoKind.ONLY_CHILD),
        ],
    )
    def test_simple_pseudo(self, text, kind):
        part = parse_selector(text).target()
        assert part.pseudo_classes == [PseudoClass(kind)]

    def test_pseudo_name_is_case_insensitive(self):
        part = parse_selector("Button:FOCUS").target()
        assert part.pseudo_classes == [PseudoClass(PseudoKind.FOCUS)]

    def test_nth_child(self):
        part = parse_selector("Item:nth-child(3)").target()
        assert part.pseudo_classes == [PseudoClass.nth_child(3)]

    def test_nth_last_child(self):
        part = parse_selector(":nth-last-child( 2 )").target()
        assert part.pseudo_classes == [PseudoClass.nth_last_child(2)]

    def test_not(self):
        part = parse_selector("Button:not(:disabled)").target()
        assert part.pseudo_classes == [
            PseudoClass.negate(PseudoClass(PseudoKind.DISABLED))
        ]

    def test_not_with_nth(self):
        part = parse_selector(":not(:nth-child(1))").target()
        assert part.pseudo_classes[0].inner == PseudoClass.nth_child(1)

    def test_multiple_pseudo(self):
        part = parse_selector("Input:focus:checked").target()
        kinds = [p.kind for p in part.pseudo_classes]
        assert kinds == [PseudoKind.FOCUS, PseudoKind.CHECKED]


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class TestAttributes:
    def test_exists(self):
        part = parse_selector("[disabled]").target()
        assert part.attributes == [AttributeSelector(name="disabled")]

    @pytest.mark.parametrize(
        "text, op",
        [
            ("[class=a]", AttributeOp.EQUALS),
            ("[class~=a]", AttributeOp.CONTAINS_WORD),
            ("[class|=a]", AttributeOp.STARTS_WITH_WORD),
            ("[class^=a]", AttributeOp.STARTS_WITH),
            ("[class$=a]", AttributeOp.ENDS_WITH),
            ("[class*=a]", AttributeOp.CONTAINS),
        ],
    )
    def test_operators(self, text, op):
        attr = parse_selector(text).target().attributes[0]
        assert attr.op is op
        assert attr.value == "a"

    def test_quoted_values(self):
        double = parse_selector('[id="main panel"]').target().attributes[0]
        single = parse_selector("[id='main']").target().attributes[0]
        assert double.value == "main panel"
        assert single.value == "main"

    def test_case_insensitive_flag(self):
        attr = parse_selector("[type=button i]").target().attributes[0]
        assert attr.value == "button"
        assert attr.case_insensitive

    def test_attribute_on_element(self):
        part = parse_selector("Checkbox[checked=true]").target()
        assert part.element == "Checkbox"
        assert part.attributes[0].name == "checked"


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class TestCombinators:
    def test_descendant(self):
        sel = parse_selector(".sidebar Button")
        assert sel.parts[0][1] is Combinator.DESCENDANT
        assert sel.parts[1][1] is None

    @pytest.mark.parametrize(
        "text, combinator",
        [
            ("A > B", Combinator.CHILD),
            ("A>B", Combinator.CHILD),
            ("A + B", Combinator.ADJACENT_SIBLING),
            ("A+B", Combinator.ADJACENT_SIBLING),
            ("A ~ B", Combinator.GENERAL_SIBLING),
            ("A~B", Combinator.GENERAL_SIBLING),
        ],
    )
    def test_explicit(self, text, combinator):
        sel = parse_selector(text)
        assert [p.element for p, _ in sel.parts] == ["A", "B"]
        assert sel.parts[0][1] is combinator

    def test_chain(self):
        sel = parse_selector("App > .sidebar Button:focus")
        combinators = [c for _, c in sel.parts]
        assert combinators == [Combinator.CHILD, Combinator.DESCENDANT, None]
        assert sel.target().element == "Button"

    def test_str_round_trip(self):
        text = "App > .sidebar Button:focus"
        assert str(parse_selector(text)) == text

    def test_builders_agree_with_parser(self):
        built = (
            Selector.single(SelectorPart.of_element("App"))
            .child(SelectorPart.of_class("sidebar"))
            .descendant(SelectorPart.of_id("ok"))
        )
        parsed = parse_selector("App > .sidebar #ok")
        assert str(built) == str(parsed)
        assert [c for _, c in built.parts] == [c for _, c in parsed.parts]
        assert built.specificity() == parsed.specificity() == (1, 1, 1)

    def test_then_does_not_modify_original(self):
        base = Selector.single(SelectorPart.any())
        extended = base.then(Combinator.GENERAL_SIBLING, SelectorPart.of_element("B"))
        assert str(base) == "*"
        assert base.parts[0][1] is None
        assert extended.parts[0][1] is Combinator.GENERAL_SIBLING


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "#",
            ".",
            ":",
            ":unknown",
            ":nth-child",
            ":nth-child()",
            ":nth-child(0)",
            ":nth-child(2",
            ":not(focus)",
            ":not(:focus",
            "[",
            "[class",
            "[class!=a]",
            "[class~a]",
            "[id='open]",
            "[id=a",
            "Button >",
            "Button > > Label",
            "Button +",
            "Button)",
            "Button,Label",
        ],
    )
    def test_rejected(self, text):
        with pytest.raises(SelectorSyntaxError):
            parse_selector(text)

    def test_unknown_pseudo_position(self):
        with pytest.raises(SelectorSyntaxError) as exc_info:
            parse_selector("Button:bogus")
        assert exc_info.value.position == 7
        assert "bogus" in exc_info.value.message

    def test_missing_equals_message(self):
        with pytest.raises(SelectorSyntaxError) as exc_info:
            parse_selector("[class^a]")
        assert exc_info.value.message == "Expected = after ^"

    def test_dangling_combinator_message(self):
        with pytest.raises(SelectorSyntaxError) as exc_info:
            parse_selector("Button >")
        assert exc_info.value.message == "Expected selector after combinator"

    def test_error_str(self):
        err = SelectorSyntaxError("Empty selector", 0)
        assert str(err) == "Selector parse error at 0: Empty selector"
        assert isinstance(err, ValueError)


# ---------------------------------------------------------------------------
# Selector groups
# ---------------------------------------------------------------------------


class TestParseSelectors:
    def test_group(self):
        sels = parse_selectors("Button, .primary, #submit")
        assert [str(s) for s in sels] == ["Button", ".primary", "#submit"]

    def test_empty_segments_skipped(self):
        sels = parse_selectors("Button,, Label,")
        assert len(sels) == 2

    def test_comma_inside_attribute_value(self):
        sels = parse_selectors('[id="a,b"], Label')
        assert len(sels) == 2
        assert sels[0].target().attributes[0].value == "a,b"

    def test_error_position_is_relative_to_whole_text(self):
        with pytest.raises(SelectorSyntaxError) as exc_info:
            parse_selectors("Button, :bogus")
        assert exc_info.value.position == 9
