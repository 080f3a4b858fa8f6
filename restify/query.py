"""Projection and filter maps built from URL query strings."""

from typing import Any, Dict, Mapping, Optional, Sequence

ProjectionMap = Dict[str, int]
FilterMap = Dict[str, Any]


def build_projection(
    declared_fields: Sequence[str], fields_param: Optional[str]
) -> ProjectionMap:
    """Generate a projection from the ``fields`` query parameter.

    To include a field list its name, to exclude it prepend ``-``. Names are
    separated by commas, so ``fields=name,age,-id`` gives
    ``{"name": 1, "age": 1, "id": 0}`` when all three are declared.

    Args:
        declared_fields: Field names declared by the model
        fields_param: Raw ``fields`` value; empty or None means no projection

    Returns:
        Projection map containing declared fields only
    """
    tokens = [token for token in (fields_param or "").split(",") if token]

    result: ProjectionMap = {}
    if not tokens:
        return result

    for field in declared_fields:
        if field in tokens:
            result[field] = 1
        elif f"-{field}" in tokens:
            result[field] = 0

    return result


def build_filter(
    declared_fields: Sequence[str], query_params: Mapping[str, Any]
) -> FilterMap:
    """Generate an equality filter from query parameters.

    ``?firstname=bob&age=26`` gives ``{"firstname": "bob", "age": "26"}``.
    Values are copied unchanged; keys that are not declared fields, and
    declared fields with an empty value, are left out.

    Args:
        declared_fields: Field names declared by the model
        query_params: Query parameters of the request

    Returns:
        Filter map containing declared fields only
    """
    result: FilterMap = {}

    for field in declared_fields:
        value = query_params.get(field)
        if value is None or value == "":
            continue
        result[field] = value

    return result


__all__ = ["ProjectionMap", "FilterMap", "build_projection", "build_filter"]
