"""Tests for placeholder parsing."""

import pytest
from qparam import ParseError, QueryParser, build_default_registry, unescape_literals


class TestPlaceholderSyntax:
    """Test the three placeholder forms."""

    def test_full_form(self, parser):
        """{Label:Type:Default} fills every field."""
        result = parser.parse("form_type = {Form Type:FormTypes:8-K}")

        assert result.is_valid is True
        assert len(result.placeholders) == 1
        p = result.placeholders[0]
        assert p.label == "Form Type"
        assert p.type_name == "FormTypes"
        assert p.default_value == "8-K"
        assert p.ordinal == 0
        assert p.raw_text == "{Form Type:FormTypes:8-K}"
        assert p.start == 12
        assert p.end == 37

    def test_label_only_uses_fallback_type(self, parser):
        """{Label} → StringInput with empty default."""
        p = parser.parse("{Name}").placeholders[0]

        assert p.label == "Name"
        assert p.type_name == "StringInput"
        assert p.default_value == ""

    def test_empty_type_segment(self, parser):
        """{Label::Default} → StringInput with the default."""
        p = parser.parse("{Col::fallback}").placeholders[0]

        assert p.type_name == "StringInput"
        assert p.default_value == "fallback"

    def test_empty_default_segment(self, parser):
        """{Label::} → StringInput with empty default."""
        p = parser.parse("{Col::}").placeholders[0]

        assert p.type_name == "StringInput"
        assert p.default_value == ""

    def test_default_keeps_colons(self, parser):
        """Colons after the second one belong to the default."""
        p = parser.parse("{Site::https://example.com:8080/x}").placeholders[0]

        assert p.default_value == "https://example.com:8080/x"

    def test_segments_are_trimmed(self, parser):
        """Whitespace around each segment is dropped."""
        p = parser.parse("{ Limit : NumberInput : 5 }").placeholders[0]

        assert p.label == "Limit"
        assert p.type_name == "NumberInput"
        assert p.default_value == "5"

    def test_duplicate_labels_get_own_ordinals(self, parser):
        """Same label twice → two independent placeholders."""
        result = parser.parse("{A} or {A}")

        assert [p.label for p in result.placeholders] == ["A", "A"]
        assert [p.ordinal for p in result.placeholders] == [0, 1]

    def test_ordinal_matches_position(self, parser):
        """The i-th placeholder has ordinal i."""
        result = parser.parse("{A} {B:NumberInput} {C:Tags:x,y} {D::d}")

        assert result.is_valid
        for i, p in enumerate(result.placeholders):
            assert p.ordinal == i

    def test_offsets_cover_raw_text(self, parser):
        """template[start:end] is the matched text."""
        template = "a = {A} AND b IN ({B:Tags})"
        for p in parser.parse(template).placeholders:
            assert template[p.start:p.end] == p.raw_text


class TestPlainTemplates:
    """Test templates without placeholders."""

    def test_empty_template_is_valid(self, parser):
        """Empty string parses cleanly."""
        result = parser.parse("")

        assert result.is_valid is True
        assert result.placeholders == []
        assert result.errors == []
        assert result.source == ""

    @pytest.mark.parametrize("template", [
        "plain text",
        "form_type = '10-K' && year > 2020",
        "a: b: c",
    ])
    def test_no_braces(self, parser, template):
        """No braces → no placeholders, no errors."""
        result = parser.parse(template)

        assert result.is_valid is True
        assert result.placeholders == []

    def test_escaped_braces_are_literal(self, parser):
        r"""\{ and \} never delimit a placeholder."""
        result = parser.parse(r"price \{USD\}")

        assert result.is_valid is True
        assert result.placeholders == []


class TestOccurrenceErrors:
    """Test errors reported for malformed placeholders."""

    def test_empty_braces(self, parser):
        """{} is an empty definition spanning the braces."""
        result = parser.parse("x {} y")

        assert result.is_valid is False
        assert result.placeholders == []
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.message == "Empty parameter definition"
        assert (error.start, error.end) == (2, 4)
        assert error.raw_text == "{}"

    def test_whitespace_only(self, parser):
        """{   } counts as empty."""
        result = parser.parse("{   }")

        assert result.messages == ["Empty parameter definition"]

    def test_missing_label(self, parser):
        """{:Type:Default} has no label."""
        result = parser.parse("{:StringInput:x}")

        assert result.messages == ["Parameter must have a label"]

    def test_unknown_type(self, parser):
        """Unknown type names list the registered ones, sorted."""
        result = parser.parse("{A:Bogus:1}")

        assert result.messages == [
            "Invalid component type: Bogus. Valid types are: "
            "FormTypes, NumberInput, StringInput, Tags"
        ]
        assert (result.errors[0].start, result.errors[0].end) == (0, 11)

    def test_errors_do_not_consume_ordinals(self, parser):
        """Malformed occurrences are skipped when numbering."""
        result = parser.parse("{A} {} {B}")

        assert [(p.label, p.ordinal) for p in result.placeholders] == [("A", 0), ("B", 1)]
        assert len(result.errors) == 1

    def test_all_errors_collected(self, parser):
        """Every problem is reported in one pass."""
        result = parser.parse("{} {:x} {A:Nope} }")

        assert result.messages == [
            "Empty parameter definition",
            "Parameter must have a label",
            "Invalid component type: Nope. Valid types are: "
            "FormTypes, NumberInput, StringInput, Tags",
            "Unmatched closing brace",
        ]


class TestBraceBalance:
    """Test the brace-depth scan."""

    def test_unclosed_brace(self, parser):
        """A stray { spans to the end of the template."""
        result = parser.parse("test { unclosed")

        assert result.is_valid is False
        assert result.messages == ["Unmatched opening brace"]
        assert (result.errors[0].start, result.errors[0].end) == (5, 15)

    def test_stray_closing_brace(self, parser):
        """A stray } spans one character."""
        result = parser.parse("a } b")

        assert result.messages == ["Unmatched closing brace"]
        assert (result.errors[0].start, result.errors[0].end) == (2, 3)

    def test_scan_continues_after_closing_error(self, parser):
        """Depth resets so later problems are still found."""
        result = parser.parse("} {A} } {")

        assert [p.label for p in result.placeholders] == ["A"]
        assert result.messages == [
            "Unmatched closing brace",
            "Unmatched closing brace",
            "Unmatched opening brace",
        ]

    def test_nested_open_brace(self, parser):
        """{a {b} → inner placeholder parses, outer brace is unmatched."""
        result = parser.parse("{a {b}")

        assert [p.label for p in result.placeholders] == ["b"]
        assert result.messages == ["Unmatched opening brace"]
        assert (result.errors[0].start, result.errors[0].end) == (0, 6)

    def test_escaped_opener_leaves_dangling_closer(self, parser):
        r"""\{A} is not a placeholder and its } is unmatched."""
        result = parser.parse(r"\{A}")

        assert result.placeholders == []
        assert result.messages == ["Unmatched closing brace"]


class TestHasPlaceholders:
    """Test QueryParser.has_placeholders."""

    def test_detects_placeholder(self, parser):
        assert parser.has_placeholders("x = {A}") is True

    def test_ignores_imbalance(self, parser):
        """A valid occurrence counts even when braces are unbalanced."""
        assert parser.has_placeholders("{A} {") is True

    @pytest.mark.parametrize("template", ["plain", r"\{A\}", "{}", "{A:Bogus}", "{:x}"])
    def test_rejects(self, parser, template):
        assert parser.has_placeholders(template) is False


class TestUnescapeLiterals:
    """Test unescape_literals."""

    def test_unescapes_both_braces(self):
        assert unescape_literals(r"a \{b\} c") == "a {b} c"

    def test_text_without_escapes_unchanged(self):
        assert unescape_literals("a {b} c") == "a {b} c"

    def test_idempotent_on_output(self):
        once = unescape_literals(r"\{x\} and \{y\}")
        assert unescape_literals(once) == once


class TestParserConfiguration:
    """Test parser wiring."""

    def test_custom_fallback_type(self):
        """Untyped placeholders take the configured fallback."""
        parser = QueryParser(build_default_registry(), fallback_type="NumberInput")

        assert parser.parse("{Limit}").placeholders[0].type_name == "NumberInput"

    def test_sees_later_registrations(self, engine):
        """Type names are looked up per parse, not cached."""
        from qparam import TextType

        class Ticker(TextType):
            type_name = "Ticker"

        assert engine.parse("{T:Ticker}").is_valid is False
        engine.register(Ticker())
        assert engine.parse("{T:Ticker}").is_valid is True

    def test_parse_error_str(self):
        assert str(ParseError("Unmatched closing brace", 2, 3)) == "Unmatched closing brace (at 2:3)"

    def test_display_query_is_identity(self, parser):
        assert parser.display_query("a {B}") == "a {B}"
