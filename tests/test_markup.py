"""Tests for MarkupBuilder."""

from svgstream.markup import MarkupBuilder, format_attrs


class TestMarkupBuilder:
    """Tests for markup accumulation."""

    def test_tags(self) -> None:
        mb = MarkupBuilder()
        mb.start_tag("g", [("fill", "red")]).empty_tag("circle", [("r", "5")]).end_tag("g")
        assert mb.build() == '<g fill="red"><circle r="5"/></g>'

    def test_append_skips_empty(self) -> None:
        mb = MarkupBuilder().append("").append("a").append("").append("b")
        assert mb.build() == "ab"

    def test_tag_without_attrs(self) -> None:
        assert MarkupBuilder().empty_tag("stop").build() == "<stop/>"


def test_format_attrs_escapes_values() -> None:
    assert format_attrs([("x", "0"), ("fill", 'a"b')]) == ' x="0" fill="a&quot;b"'
