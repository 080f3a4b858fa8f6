"""Tests for route input schemas."""

import logging
from typing import Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from restify.model import OBJECT_ID_PATTERN, ModelDescriptor
from restify.parameters import (
    DEFAULT_LIMIT,
    FIELDS_PATTERN,
    MAX_LIMIT,
    filter_query_model,
    id_params_model,
    pagination_query_model,
    projection_query_model,
)


class Widget(BaseModel):
    title: str = Field(min_length=2, description="Widget title")
    price: float = 0


class Clashing(BaseModel):
    name: str
    limit: str = ""


@pytest.fixture
def widget_model():
    return ModelDescriptor.from_schema("widget", Widget)


class TestIdParams:
    """Test the id path parameter schema."""

    def test_pattern_is_model_pattern(self, widget_model):
        """Test the id pattern is exactly the supplied pattern."""
        params = id_params_model(widget_model)
        schema = params.model_json_schema()
        assert schema["properties"]["id"]["pattern"] == OBJECT_ID_PATTERN

    def test_custom_pattern(self):
        """Test a custom id pattern is used verbatim."""
        model = ModelDescriptor("widget", Widget, id_pattern=r"^w-\d{4}$")
        params = id_params_model(model)

        assert params.model_json_schema()["properties"]["id"]["pattern"] == r"^w-\d{4}$"
        assert params.model_validate({"id": "w-0042"}).id == "w-0042"
        with pytest.raises(ValidationError):
            params.model_validate({"id": "0042"})

    def test_rejects_non_matching_id(self, widget_model):
        """Test ids not matching the pattern are rejected."""
        params = id_params_model(widget_model)
        params.model_validate({"id": "5f1d7f9b8e4b2a3c4d5e6f70"})
        with pytest.raises(ValidationError):
            params.model_validate({"id": "not-an-object-id"})


class TestPaginationQuery:
    """Test the list route query schema."""

    def test_defaults(self, widget_model):
        """Test limit and offset defaults when nothing is supplied."""
        query = pagination_query_model(widget_model).model_validate({})
        assert query.limit == DEFAULT_LIMIT == 10
        assert query.offset == 0
        assert query.fields is None

    @pytest.mark.parametrize(
        "values",
        [
            {"limit": 0},
            {"limit": MAX_LIMIT + 1},
            {"offset": -1},
            {"fields": "title;price"},
            {"fields": "title, price"},
            {"fields": "title,-price"},
        ],
    )
    def test_rejects_out_of_range(self, widget_model, values):
        """Test invalid pagination values are rejected."""
        with pytest.raises(ValidationError):
            pagination_query_model(widget_model).model_validate(values)

    def test_bounds_accepted(self, widget_model):
        """Test boundary values are accepted and strings coerced."""
        query = pagination_query_model(widget_model).model_validate(
            {"limit": "1000", "offset": "0", "fields": "title,price"}
        )
        assert query.limit == 1000
        assert query.offset == 0
        assert query.fields == "title,price"

    def test_fields_pattern(self, widget_model):
        """Test the fields parameter carries the exact pattern."""
        schema = pagination_query_model(widget_model).model_json_schema()
        fields = schema["properties"]["fields"]
        variants = fields.get("anyOf", [fields])
        assert [v.get("pattern") for v in variants if v.get("type") == "string"] == [
            FIELDS_PATTERN
        ]
        assert fields["default"] is None

    def test_fields_absent_by_default(self, widget_model):
        """Test an omitted fields parameter validates as None."""
        query = projection_query_model(widget_model).model_validate({})
        assert query.fields is None
        assert projection_query_model(widget_model).model_validate(
            {"fields": "title"}
        ).fields == "title"

    def test_unknown_params_ignored(self, widget_model):
        """Test unknown query parameters do not fail validation."""
        query = pagination_query_model(widget_model).model_validate({"color": "red"})
        assert not hasattr(query, "color")


class TestProjectionQuery:
    """Test the get route query schema."""

    def test_fields_only(self, widget_model):
        """Test only the fields parameter is declared."""
        model = projection_query_model(widget_model)
        assert list(model.model_fields) == ["fields"]


class TestFilterQuery:
    """Test the count and find route query schemas."""

    def test_all_fields_optional(self, widget_model):
        """Test required payload fields are optional filters."""
        query = filter_query_model(widget_model).model_validate({})
        assert query.title is None
        assert query.price is None

    def test_schema_types_enforced(self, widget_model):
        """Test filters are validated against payload field types."""
        model = filter_query_model(widget_model)
        assert model.model_validate({"price": "9.5"}).price == 9.5
        with pytest.raises(ValidationError):
            model.model_validate({"price": "cheap"})
        with pytest.raises(ValidationError):
            model.model_validate({"title": "x"})

    def test_count_has_no_pagination(self, widget_model):
        """Test the count schema declares model fields only."""
        model = filter_query_model(widget_model)
        assert set(model.model_fields) == {"title", "price"}

    def test_find_adds_pagination(self, widget_model):
        """Test the find schema merges in limit, offset and fields."""
        model = filter_query_model(widget_model, paginate=True)
        assert set(model.model_fields) == {"title", "price", "limit", "offset", "fields"}
        query = model.model_validate({"title": "Lamp"})
        assert (query.limit, query.offset, query.fields) == (10, 0, None)

    def test_undeclared_schema_field_is_string(self):
        """Test declared fields missing from the schema filter as strings."""
        model = ModelDescriptor("widget", Widget, fields=["title", "sku"])
        query = filter_query_model(model).model_validate({"sku": "A1"})
        assert query.sku == "A1"

    def test_pagination_wins_on_collision(self, caplog):
        """Test a model field named like a pagination parameter is replaced."""
        model = ModelDescriptor.from_schema("clashing", Clashing)

        with caplog.at_level(logging.WARNING, logger="restify.parameters"):
            query_model = filter_query_model(model, paginate=True)

        assert query_model.model_fields["limit"].annotation is int
        assert query_model.model_validate({}).limit == 10
        assert "clash" in caplog.text

    def test_optional_annotation_kept(self):
        """Test already optional schema fields stay optional."""

        class Note(BaseModel):
            body: Optional[str] = None

        model = ModelDescriptor.from_schema("note", Note)
        assert filter_query_model(model).model_validate({}).body is None
