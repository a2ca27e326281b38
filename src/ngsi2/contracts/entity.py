# ngsi2/contracts/entity.py
"""
Entity contracts.

An entity is a named, typed resource holding a mapping of attribute name
to attribute. On the wire the attributes sit next to ``id`` and ``type``
(flattened representation); in Python they are grouped under
``Entity.attributes``.
"""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)


class NgsiModel(BaseModel):
    """Base for wire models: camelCase aliases, unknown fields preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Metadata(NgsiModel):
    type: str | None = None
    value: Any = None

    @model_serializer(mode="wrap")
    def _keep_null_value(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {"value": data.pop("value", None), **data}


class Attribute(NgsiModel):
    value: Any = None
    type: str | None = None
    metadata: dict[str, Metadata] | None = None

    @model_serializer(mode="wrap")
    def _keep_null_value(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # a null attribute value is meaningful and must survive exclude_none
        data = handler(self)
        return {"value": data.pop("value", None), **data}


class Entity(BaseModel):
    """An entity decoded from its flattened wire form.

    Every key other than ``id`` and ``type`` is an attribute, including one
    literally named ``attributes``. Use ``Entity.build`` to create an entity
    from an attribute mapping.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    type: str | None = None
    attributes: dict[str, Attribute] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_attributes(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        attributes = {k: v for k, v in data.items() if k not in ("id", "type")}
        return {"id": data.get("id"), "type": data.get("type"), "attributes": attributes}

    @classmethod
    def build(
        cls,
        id: str | None = None,
        type: str | None = None,
        attributes: Mapping[str, Attribute | dict[str, Any]] | None = None,
    ) -> Entity:
        return cls.model_validate({"id": id, "type": type, **(attributes or {})})

    @model_serializer(mode="wrap")
    def _flatten(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        attributes = data.pop("attributes", None) or {}
        return {**data, **attributes}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AttributeType(NgsiModel):
    types: list[str] = Field(default_factory=list)


class EntityType(NgsiModel):
    """Union of attribute names/types of the entities sharing a type."""

    type: str | None = None
    attrs: dict[str, AttributeType] = Field(default_factory=dict)
    count: int = 0
