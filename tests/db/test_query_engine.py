"""Tests for in-process filter and projection evaluation."""

import pytest

from restify.db.query import QueryEngine

DOCUMENT = {
    "_id": "w1",
    "title": "Lamp",
    "price": 5,
    "dimensions": {"height": 30},
}


class TestMatch:
    """Test QueryEngine.match."""

    @pytest.mark.parametrize("query", [None, {}])
    def test_empty_query_matches(self, query):
        assert QueryEngine.match(DOCUMENT, query)

    def test_equality(self):
        assert QueryEngine.match(DOCUMENT, {"title": "Lamp", "price": 5})
        assert not QueryEngine.match(DOCUMENT, {"title": "Lamp", "price": 6})

    def test_equality_is_type_sensitive(self):
        """Test string filters do not match numeric values."""
        assert not QueryEngine.match(DOCUMENT, {"price": "5"})

    def test_missing_field(self):
        assert not QueryEngine.match(DOCUMENT, {"weight": 1})

    def test_nested_values_compared_whole(self):
        assert QueryEngine.match(DOCUMENT, {"dimensions": {"height": 30}})
        assert not QueryEngine.match(DOCUMENT, {"dimensions": {"height": 31}})
        assert not QueryEngine.match(DOCUMENT, {"price": {"$gt": 4}})


class TestProject:
    """Test QueryEngine.project."""

    @pytest.mark.parametrize("projection", [None, {}])
    def test_no_projection_copies(self, projection):
        result = QueryEngine.project(DOCUMENT, projection)
        assert result == DOCUMENT
        assert result is not DOCUMENT

    def test_inclusion_keeps_id(self):
        assert QueryEngine.project(DOCUMENT, {"title": 1}) == {
            "_id": "w1",
            "title": "Lamp",
        }

    def test_exclusion(self):
        assert QueryEngine.project(DOCUMENT, {"price": 0, "dimensions": 0}) == {
            "_id": "w1",
            "title": "Lamp",
        }

    def test_mixed(self):
        """Test excluded fields are dropped from an inclusion projection."""
        result = QueryEngine.project(DOCUMENT, {"title": 1, "price": 1, "_id": 0})
        assert result == {"title": "Lamp", "price": 5}

    def test_source_untouched(self):
        QueryEngine.project(DOCUMENT, {"price": 0})
        assert "price" in DOCUMENT
