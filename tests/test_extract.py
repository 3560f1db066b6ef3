#
# Docparams - Extract Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from docparams.extract import DeclaredParam, extract, normalize_styles, param_pattern


# Test Cases -----------------------------------------------------------------------------------------------------------


class TestExtract:
    """Test suite for extract()."""

    def test_single_tag(self):
        """Emit name, canonical expected type, actual type and position."""
        result = extract("@param int $age", ["age"], ["42"])
        assert result == [DeclaredParam(name="age", expected_type="integer", actual_type="string", position=0)]

    @pytest.mark.parametrize(
        "doc, names",
        [
            pytest.param(None, ["a"], id="no-doc"),
            pytest.param("", ["a"], id="empty-doc"),
            pytest.param("@param int $a", [], id="no-params"),
            pytest.param("Adds numbers.", ["a"], id="no-tags"),
        ],
    )
    def test_empty_results(self, doc, names):
        """Return an empty list when nothing can be extracted."""
        assert extract(doc, names, [1]) == []

    def test_document_order(self):
        """Preserve tag order from the docstring, not from the signature."""
        doc = """
        @param string $b
        @param int $a
        """
        result = extract(doc, ["a", "b"], [1, "x"])
        assert [p.name for p in result] == ["b", "a"]
        assert [p.position for p in result] == [1, 0]

    def test_unknown_name_dropped(self):
        """Never emit a tag whose name is not a formal parameter."""
        doc = "@param int $ghost\n@param int $a"
        result = extract(doc, ["a"], [1])
        assert [p.name for p in result] == ["a"]

    def test_missing_value_dropped(self):
        """Never emit a tag for a position beyond the supplied arguments."""
        doc = "@param int $a\n@param int $b"
        result = extract(doc, ["a", "b"], [1])
        assert [p.name for p in result] == ["a"]

    def test_none_value_dropped(self):
        """Treat None as not supplied."""
        doc = "@param int $a\n@param int $b"
        result = extract(doc, ["a", "b"], [None, 2])
        assert [p.name for p in result] == ["b"]

    def test_duplicates_kept(self):
        """Emit every tag of a parameter documented twice."""
        doc = "@param int $a\n@param string $a"
        result = extract(doc, ["a"], [1])
        assert [(p.name, p.expected_type) for p in result] == [("a", "integer"), ("a", "string")]

    def test_non_scalar_tags_ignored(self):
        """Skip tags with types outside the alias registry."""
        doc = """
        @param array $a
        @param int|null $b
        @param Foo $c
        @param string $d
        """
        result = extract(doc, ["a", "b", "c", "d"], [[], 1, object(), "x"])
        assert [p.name for p in result] == ["d"]

    def test_type_tokens_case_sensitive(self):
        """Match type tokens exactly, without case folding."""
        assert extract("@param Int $a", ["a"], [1]) == []

    @pytest.mark.parametrize(
        "doc",
        [
            pytest.param("@param int $valid", id="suffix"),
            pytest.param("@param int $idx", id="prefix"),
            pytest.param("@param int $my_id", id="underscore"),
        ],
    )
    def test_whole_word_names(self, doc):
        """Never match a parameter name inside a longer name."""
        assert extract(doc, ["id"], [1]) == []

    def test_sigil_optional(self):
        """Accept phpdoc tags without the $ sigil."""
        result = extract("@param bool enabled", ["enabled"], [True])
        assert result[0].expected_type == "boolean"

    def test_sphinx_style(self):
        """Recognize :param type name: tags."""
        doc = """
        :param str name: Ignored, not a known alias.
        :param float rate: Interest rate.
        """
        result = extract(doc, ["name", "rate"], ["x", 0.5])
        assert result == [DeclaredParam(name="rate", expected_type="double", actual_type="double", position=1)]

    def test_google_style(self):
        """Recognize name (type): lines, including the optional marker."""
        doc = """
        Args:
            count (int): How many.
            label (string, optional): Caption.
        """
        result = extract(doc, ["count", "label"], [3, 4])
        assert [(p.name, p.expected_type, p.actual_type) for p in result] == [
            ("count", "integer", "integer"),
            ("label", "string", "integer"),
        ]

    def test_google_style_only_in_args_section(self):
        """Ignore name (type): entries under Returns:, Raises: or outside any section."""
        doc = """
        total (int): Before any section.

        Args:
            count (int): How many.

        Returns:
            total (int): Sum of the items.
        """
        result = extract(doc, ["count", "total"], [1, "x"])
        assert [p.name for p in result] == ["count"]

    def test_google_arguments_header(self):
        """Accept Arguments: as a section header."""
        doc = "Sum things.\n\nArguments:\n    count (int): How many.\n"
        result = extract(doc, ["count"], ["3"])
        assert [(p.name, p.actual_type) for p in result] == [("count", "string")]

    def test_google_style_needs_line_start(self):
        """Ignore name (type): fragments in running prose."""
        doc = "Call with count (int): then stop."
        assert extract(doc, ["count"], [3]) == []

    def test_mixed_styles_in_document_order(self):
        """Interleave styles in the order the tags appear."""
        doc = """
        :param int b:
        @param string $a
        Args:
            c (bool): Flag.
        """
        result = extract(doc, ["a", "b", "c"], ["x", 1, True])
        assert [p.name for p in result] == ["b", "a", "c"]

    def test_styles_filter(self):
        """Recognize only the requested styles."""
        doc = "@param int $a\n:param int b:"
        result = extract(doc, ["a", "b"], [1, 2], styles=("sphinx",))
        assert [p.name for p in result] == ["b"]

    def test_first_occurrence_position(self):
        """Resolve a repeated formal name to its first position."""
        result = extract("@param int $a", ["a", "a"], [1, "x"])
        assert result[0].position == 0
        assert result[0].actual_type == "integer"


class TestParamPattern:
    """Test suite for param_pattern()."""

    def test_groups_per_style(self):
        """Expose type and name groups for each style."""
        pattern = param_pattern(["age"])
        match = pattern.search("@param integer $age")
        assert match.group("phpdoc_type") == "integer"
        assert match.group("phpdoc_name") == "age"

    def test_integer_not_split(self):
        """Match 'integer' whole rather than 'int' plus leftovers."""
        match = param_pattern(["n"], styles=("phpdoc",)).search("@param integer $n")
        assert match.group("phpdoc_type") == "integer"

    def test_names_escaped(self):
        """Treat names literally in the pattern."""
        pattern = param_pattern(["a"])
        assert pattern.search("@param int $.") is None

    def test_empty_names_rejected(self):
        """Raise ValueError without any parameter name."""
        with pytest.raises(ValueError, match=r"(?i).*parameter name"):
            param_pattern([])


class TestNormalizeStyles:
    """Test suite for normalize_styles()."""

    def test_deduplicates_in_order(self):
        assert normalize_styles(["google", "phpdoc", "google"]) == ("google", "phpdoc")

    def test_single_string(self):
        """Accept a single style name given as a string."""
        assert normalize_styles("sphinx") == ("sphinx",)

    def test_unknown_style(self):
        """Raise ValueError for unknown styles."""
        with pytest.raises(ValueError, match=r"(?i).*unknown docstring style.*numpy"):
            normalize_styles(["numpy"])

    def test_empty(self):
        """Raise ValueError for no styles at all."""
        with pytest.raises(ValueError, match=r"(?i).*at least one"):
            normalize_styles([])
