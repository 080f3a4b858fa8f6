"""Validation schemas for generated route inputs.

Each helper returns either a ``(type, FieldInfo)`` pair ready for
:func:`pydantic.create_model`, or a model built from such pairs.
"""

import logging
import re
from typing import Any, Dict, Optional, Tuple, Type, cast

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic.fields import FieldInfo
from typing_extensions import Annotated

from restify.model import ModelDescriptor

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 1000
DEFAULT_OFFSET = 0
FIELDS_PATTERN = r"^[a-zA-Z0-9_,]+$"

PAGINATION_PARAMS = ("limit", "offset", "fields")

FieldDefinition = Tuple[Any, FieldInfo]


def limit_field() -> FieldDefinition:
    """Definition of the ``limit`` query parameter."""
    return (
        int,
        Field(
            default=DEFAULT_LIMIT,
            ge=1,
            le=MAX_LIMIT,
            description=f"limit. min = 1, max = {MAX_LIMIT}",
        ),
    )


def offset_field() -> FieldDefinition:
    """Definition of the ``offset`` query parameter."""
    return (
        int,
        Field(default=DEFAULT_OFFSET, ge=0, description="offset. min = 0"),
    )


def fields_field() -> FieldDefinition:
    """Definition of the ``fields`` query parameter."""
    description = (
        "Comma separated list of fields to include in the response, for "
        "example: <code>firstName,lastName</code>"
    )
    return (
        Optional[str],
        Field(default=None, pattern=FIELDS_PATTERN, description=description),
    )


def _model_prefix(model: ModelDescriptor) -> str:
    return "".join(part.capitalize() for part in re.split(r"[_-]+", model.name))


def _build(name: str, fields: Dict[str, FieldDefinition]) -> Type[BaseModel]:
    return cast(
        Type[BaseModel],
        create_model(  # type: ignore[call-overload]
            name,
            __config__=ConfigDict(extra="ignore"),
            **fields,
        ),
    )


def id_params_model(model: ModelDescriptor) -> Type[BaseModel]:
    """Path parameters of the ``/{name}/{id}`` routes.

    The ``id`` pattern is exactly the model's identifier pattern.
    """
    id_field = (
        str,
        Field(
            pattern=cast(str, model.id_pattern),
            description=f"{model.name} identifier",
        ),
    )
    return _build(f"{_model_prefix(model)}IdParams", {"id": id_field})


def projection_query_model(model: ModelDescriptor) -> Type[BaseModel]:
    """Query parameters of the get-by-id route."""
    return _build(
        f"{_model_prefix(model)}ProjectionQuery", {"fields": fields_field()}
    )


def pagination_query_model(model: ModelDescriptor) -> Type[BaseModel]:
    """Query parameters of the list route."""
    return _build(
        f"{_model_prefix(model)}ListQuery",
        {
            "limit": limit_field(),
            "offset": offset_field(),
            "fields": fields_field(),
        },
    )


def _optional_field(field_info: Optional[FieldInfo]) -> FieldDefinition:
    """Turn a payload field into an optional query filter of the same type."""
    if field_info is None:
        return (Optional[str], Field(default=None))

    annotation: Any = field_info.annotation
    if field_info.metadata:
        annotation = Annotated[tuple([annotation, *field_info.metadata])]
    return (
        Optional[annotation],
        Field(
            default=None,
            alias=field_info.alias,
            title=field_info.title,
            description=field_info.description,
        ),
    )


def filter_query_model(
    model: ModelDescriptor, paginate: bool = False
) -> Type[BaseModel]:
    """Query parameters of the count and find routes.

    Every declared field becomes an optional filter typed after the payload
    schema. With ``paginate`` the ``limit``, ``offset`` and ``fields``
    parameters are merged in last and replace any model field of the same
    name.

    Args:
        model: Model descriptor
        paginate: Whether to add the pagination parameters

    Returns:
        Generated query model
    """
    schema_fields = model.payload_schema.model_fields
    fields: Dict[str, FieldDefinition] = {
        name: _optional_field(schema_fields.get(name)) for name in model.fields
    }

    suffix = "CountQuery"
    if paginate:
        collisions = [name for name in PAGINATION_PARAMS if name in fields]
        if collisions:
            logger.warning(
                f"Model '{model.name}' declares fields {collisions} that clash "
                "with pagination parameters; the pagination parameters win"
            )
        fields.update(
            {
                "limit": limit_field(),
                "offset": offset_field(),
                "fields": fields_field(),
            }
        )
        suffix = "FindQuery"

    return _build(f"{_model_prefix(model)}{suffix}", fields)


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "DEFAULT_OFFSET",
    "FIELDS_PATTERN",
    "PAGINATION_PARAMS",
    "limit_field",
    "offset_field",
    "fields_field",
    "id_params_model",
    "projection_query_model",
    "pagination_query_model",
    "filter_query_model",
]
