"""
Tests for decoding the filters and sorting parameters.
"""

import pytest

from app.domains.shared.query import (
    FilterCriterion,
    MalformedFilterSyntax,
    MalformedSortSyntax,
    QueryError,
    SortCriterion,
    parse_filters,
    parse_sort,
)


class TestParseFilters:
    """Tests for parse_filters."""

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty(self, text):
        """Test that missing or empty filter text yields no criteria."""
        assert parse_filters(text) == []

    def test_keeps_order(self):
        """Test that filter criteria keep their listed order."""
        criteria = parse_filters(
            '[{"id": "RoleId", "value": "2"}, {"id": "LastName", "value": "Smith"}]'
        )
        assert criteria == [
            FilterCriterion(field_name="RoleId", raw_value="2"),
            FilterCriterion(field_name="LastName", raw_value="Smith"),
        ]

    def test_numeric_value_becomes_text(self):
        """Test that a numeric filter value is kept as text."""
        [criterion] = parse_filters('[{"id": "RoleId", "value": 2}]')
        assert criterion.raw_value == "2"

    def test_empty_list(self):
        """Test that an empty JSON list yields no criteria."""
        assert parse_filters("[]") == []

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            '{"id": "RoleId", "value": "2"}',
            '[{"id": "RoleId"}]',
            '[{"value": "2"}]',
            '[{"id": "", "value": "2"}]',
            '[{"id": "RoleId", "value": null}]',
        ],
    )
    def test_malformed(self, text):
        """Test that malformed filter text raises MalformedFilterSyntax."""
        with pytest.raises(MalformedFilterSyntax):
            parse_filters(text)

    def test_malformed_is_query_error(self):
        """Test that filter syntax errors are QueryErrors."""
        with pytest.raises(QueryError):
            parse_filters("[")


class TestParseSort:
    """Tests for parse_sort."""

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty(self, text):
        """Test that missing or empty sort text yields no criteria."""
        assert parse_sort(text) == []

    def test_desc_defaults_to_false(self):
        """Test that desc defaults to ascending."""
        assert parse_sort('[{"id": "LastName"}]') == [
            SortCriterion(field_name="LastName", descending=False)
        ]

    def test_keeps_order(self):
        """Test that sort criteria keep their listed order."""
        criteria = parse_sort('[{"id": "LastName", "desc": true}, {"id": "FirstName", "desc": false}]')
        assert [(c.field_name, c.descending) for c in criteria] == [
            ("LastName", True),
            ("FirstName", False),
        ]

    @pytest.mark.parametrize(
        "text",
        ['{"id": "LastName"}', '[{"desc": true}]', '[{"id": "LastName", "desc": "sideways"}]', "]["],
    )
    def test_malformed(self, text):
        """Test that malformed sort text raises MalformedSortSyntax."""
        with pytest.raises(MalformedSortSyntax):
            parse_sort(text)
