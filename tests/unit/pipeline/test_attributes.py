"""Tests for class attribute lookup and merging on raw attribute strings."""

from __future__ import annotations

import pytest

from prehighlight.pipeline.attributes import class_tokens, extract_class, merge_classes


class TestExtractClass:
    """extract_class returns the first well-formed class value verbatim."""

    @pytest.mark.parametrize(
        ("attrs", "expected"),
        [
            (' class="rust"', "rust"),
            (" class='rust'", "rust"),
            (' class = "a  b"', "a  b"),
            (' id="x" class="language-python python" data-x="1"', "language-python python"),
            (" class='a' class=\"b\"", "b"),
            (' class="a" class="b"', "a"),
            (" id='a' class=\"b\"", "b"),
        ],
    )
    def test_found(self, attrs: str, expected: str) -> None:
        assert extract_class(attrs) == expected

    @pytest.mark.parametrize(
        "attrs",
        ["", " ", ' id="x"', ' class=""', " class=''", " class=rust"],
    )
    def test_absent(self, attrs: str) -> None:
        assert extract_class(attrs) is None

    def test_tokens_are_case_sensitive_and_ordered(self) -> None:
        assert class_tokens(' class="Rust  rust\tPython"') == ["Rust", "rust", "Python"]

    def test_no_tokens_without_class(self) -> None:
        assert class_tokens(' id="x"') == []


class TestMergeIntoExistingClass:
    """Existing class attributes keep their position and quote style."""

    def test_double_quoted(self) -> None:
        result = merge_classes(' class="rust"', ["sourceCode", "rust"])
        assert result == ' class="rust sourceCode"'

    def test_single_quoted_keeps_quotes(self) -> None:
        result = merge_classes(" class='a b'", ["sourceCode", "rust"])
        assert result == " class='a b sourceCode rust'"

    def test_position_and_neighbours_preserved(self) -> None:
        attrs = ' id="ex" class="a" data-line="3"'
        result = merge_classes(attrs, ["sourceCode"])
        assert result == ' id="ex" class="a sourceCode" data-line="3"'

    def test_spacing_around_equals_is_normalised(self) -> None:
        assert merge_classes(' class = "a"', ["b"]) == ' class="a b"'

    def test_extra_whitespace_between_tokens_collapses(self) -> None:
        assert merge_classes(' class="  a   b "', ["c"]) == ' class="a b c"'

    def test_empty_class_value_is_filled(self) -> None:
        assert merge_classes(' class=""', ["sourceCode"]) == ' class="sourceCode"'

    def test_no_duplicates(self) -> None:
        result = merge_classes(' class="sourceCode rust"', ["sourceCode", "rust"])
        assert result == ' class="sourceCode rust"'

    def test_case_sensitive_union(self) -> None:
        assert merge_classes(' class="Rust"', ["rust"]) == ' class="Rust rust"'

    def test_marker_then_language_order(self) -> None:
        result = merge_classes(' class="x"', ["sourceCode", "python"])
        assert result == ' class="x sourceCode python"'

    def test_double_quoted_wins_over_single(self) -> None:
        """Mixed quoting: the first well-formed double-quoted class is used."""
        result = merge_classes(" id='a' class=\"b\"", ["c"])
        assert result == " id='a' class=\"b c\""

    def test_single_quoted_with_double_quoted_neighbour(self) -> None:
        result = merge_classes(" class='a' title=\"t\"", ["c"])
        assert result == " class='a c' title=\"t\""


class TestMergeAddsClass:
    """A missing class attribute is appended."""

    def test_empty_attrs(self) -> None:
        assert merge_classes("", ["sourceCode", "rust"]) == ' class="sourceCode rust"'

    def test_whitespace_attrs(self) -> None:
        assert merge_classes("  \n", ["sourceCode"]) == ' class="sourceCode"'

    def test_unrelated_attributes_preserved_verbatim(self) -> None:
        result = merge_classes(' id="x" data-y="1"', ["sourceCode"])
        assert result == ' id="x" data-y="1" class="sourceCode"'
        assert 'id="x" data-y="1"' in result

    def test_trailing_whitespace_trimmed_before_append(self) -> None:
        assert merge_classes(' id="x"  ', ["a"]) == ' id="x" class="a"'

    def test_duplicate_new_classes_added_once(self) -> None:
        assert merge_classes("", ["a", "a"]) == ' class="a"'


class TestMergeNormalisation:
    """The result is empty or starts with exactly one space."""

    def test_nothing_to_do(self) -> None:
        assert merge_classes("", []) == ""
        assert merge_classes("   ", []) == ""

    def test_leading_space_added(self) -> None:
        assert merge_classes('id="x"', []) == ' id="x"'
        assert merge_classes('class="a"', ["b"]) == ' class="a b"'

    def test_leading_whitespace_collapsed(self) -> None:
        assert merge_classes('\n   class="a"', ["b"]) == ' class="a b"'


class TestMergeIdempotence:
    """merge(merge(attrs, C), C) == merge(attrs, C)."""

    @pytest.mark.parametrize(
        "attrs",
        [
            "",
            " ",
            ' id="x"',
            ' id="x" data-y="1"',
            ' class="a b"',
            " class='a b'",
            ' class=""',
            ' class = "x"  id="y" ',
            "\n\tclass='q'",
            " id='a' class=\"b\"",
        ],
    )
    @pytest.mark.parametrize(
        "classes",
        [[], ["sourceCode"], ["sourceCode", "rust"], ["a", "b"]],
    )
    def test_idempotent(self, attrs: str, classes: list[str]) -> None:
        once = merge_classes(attrs, classes)
        assert merge_classes(once, classes) == once
