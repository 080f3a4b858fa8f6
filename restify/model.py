"""Model descriptors consumed by the route factory."""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple, Type, Union

from pydantic import BaseModel

from restify.exceptions import InvalidModelError

# 24 hex characters, the shape of a MongoDB ObjectId
OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class ModelDescriptor:
    """Shape and validation rules of a stored record type.

    Attributes:
        name: Path segment the routes are mounted under
        payload_schema: Pydantic model validating create/update payloads
        fields: Declared field names; defaults to the schema's fields in order
        id_pattern: Regular expression a record identifier must match
        collection: Store collection name; defaults to ``name``
        description: Optional text used in generated route descriptions
    """

    name: str
    payload_schema: Type[BaseModel]
    fields: Tuple[str, ...] = ()
    id_pattern: Union[str, "re.Pattern[str]"] = OBJECT_ID_PATTERN
    collection: str = ""
    description: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not _NAME_PATTERN.match(self.name):
            raise InvalidModelError(
                f"Invalid model name: {self.name!r}",
                details={"name": self.name},
            )
        if not (
            isinstance(self.payload_schema, type)
            and issubclass(self.payload_schema, BaseModel)
        ):
            raise InvalidModelError(
                f"Model {self.name!r} payload schema must be a pydantic model",
                details={"name": self.name},
            )

        # Frozen dataclass, so normalized values are written through object
        fields = tuple(self.fields) or tuple(self.payload_schema.model_fields)
        object.__setattr__(self, "fields", fields)

        pattern = self.id_pattern
        if isinstance(pattern, re.Pattern):
            pattern = pattern.pattern
        try:
            re.compile(pattern)
        except re.error as e:
            raise InvalidModelError(
                f"Model {self.name!r} has an invalid id pattern: {e}",
                details={"name": self.name, "id_pattern": pattern},
            ) from e
        object.__setattr__(self, "id_pattern", pattern)

        if not self.collection:
            object.__setattr__(self, "collection", self.name)

    @classmethod
    def from_schema(
        cls,
        name: str,
        payload_schema: Type[BaseModel],
        **kwargs,
    ) -> "ModelDescriptor":
        """Describe a model whose declared fields are its schema's fields."""
        return cls(name=name, payload_schema=payload_schema, **kwargs)

    @property
    def title(self) -> str:
        return self.description or self.name
