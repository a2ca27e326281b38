# ngsi2/core/contract.py
"""
RequestContract - the entry point each NGSI v2 operation goes through.

For every operation the contract:

1. validates every identifier-bearing input (first violation wins),
2. enforces parameter co-presence and exclusion rules,
3. parses correlated parameters (geo-queries, plain-text values),
4. forwards a clean request to the ``ContextStore``,
5. shapes the answer: total-count headers for listings, resource
   location for creations.

Nothing here touches HTTP; ``ngsi2.api.routes`` maps results onto
responses.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, TypeVar

from ngsi2.contracts.entity import Attribute, Entity, EntityType
from ngsi2.contracts.errors import BadRequest, IllegalArgument, IncompatibleParameter
from ngsi2.contracts.registration import Registration
from ngsi2.contracts.results import Created, PageResponse
from ngsi2.contracts.subscription import Subscription
from ngsi2.core.geo import geo_query_from_params
from ngsi2.core.pagination import to_page_response, wants_count
from ngsi2.core.store.base import ContextStore
from ngsi2.core.syntax import (
    validate_attribute,
    validate_attributes,
    validate_entity,
    validate_field,
    validate_query_lists,
    validate_registration,
    validate_subscription,
)
from ngsi2.core.values import ensure_structured, text_to_value, value_to_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestContract:
    """Validating façade in front of a ``ContextStore``."""

    def __init__(self, store: ContextStore, *, api_prefix: str = "/v2") -> None:
        self.store = store
        self.api_prefix = api_prefix.rstrip("/")

    async def _forward(self, call: Awaitable[T]) -> T:
        try:
            return await call
        except ValueError as exc:
            logger.warning("Context store rejected an argument: %s", exc)
            raise IllegalArgument(str(exc)) from exc

    def _location(self, collection: str, resource_id: str | None) -> str | None:
        if resource_id is None:
            return None
        return f"{self.api_prefix}/{collection}/{resource_id}"

    def _validate_attribute_path(
        self, entity_id: str, attr_name: str, entity_type: str | None
    ) -> None:
        validate_query_lists(ids=entity_id, types=entity_type, attrs=attr_name)

    # -- api resources -------------------------------------------------------

    async def list_resources(self) -> dict[str, str]:
        return await self._forward(self.store.list_resources())

    # -- entities ------------------------------------------------------------

    async def list_entities(
        self,
        *,
        ids: str | None = None,
        types: str | None = None,
        id_pattern: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        attrs: str | None = None,
        query: str | None = None,
        georel: str | None = None,
        geometry: str | None = None,
        coords: str | None = None,
        order_by: list[str] | None = None,
        options: str | None = None,
    ) -> PageResponse[Entity]:
        validate_query_lists(ids=ids, types=types, attrs=attrs)
        if ids is not None and id_pattern is not None:
            raise IncompatibleParameter(ids, id_pattern, "List entities")
        geo_query = geo_query_from_params(georel, geometry, coords)

        page = await self._forward(
            self.store.list_entities(
                ids=ids,
                types=types,
                id_pattern=id_pattern,
                limit=limit,
                offset=offset,
                attrs=attrs,
                query=query,
                geo_query=geo_query,
                order_by=order_by,
            )
        )
        return to_page_response(page, wants_count(options))

    async def create_entity(self, entity: Entity) -> Created:
        validate_entity(entity)
        if entity.id is None:
            raise BadRequest("Entity id is required")
        await self._forward(self.store.create_entity(entity))
        return Created(resource_id=entity.id, location=self._location("entities", entity.id))

    async def retrieve_entity(self, entity_id: str, attrs: str | None = None) -> Entity:
        validate_query_lists(ids=entity_id, attrs=attrs)
        return await self._forward(self.store.retrieve_entity(entity_id, attrs))

    async def update_or_append_entity(
        self, entity_id: str, attributes: dict[str, Attribute]
    ) -> None:
        validate_field(entity_id)
        validate_attributes(attributes)
        await self._forward(self.store.update_or_append_entity(entity_id, attributes))

    async def update_existing_entity_attributes(
        self, entity_id: str, attributes: dict[str, Attribute]
    ) -> None:
        validate_field(entity_id)
        validate_attributes(attributes)
        await self._forward(
            self.store.update_existing_entity_attributes(entity_id, attributes)
        )

    async def replace_all_entity_attributes(
        self, entity_id: str, attributes: dict[str, Attribute]
    ) -> None:
        validate_field(entity_id)
        validate_attributes(attributes)
        await self._forward(self.store.replace_all_entity_attributes(entity_id, attributes))

    async def remove_entity(self, entity_id: str) -> None:
        validate_field(entity_id)
        await self._forward(self.store.remove_entity(entity_id))

    # -- attributes ----------------------------------------------------------

    async def retrieve_attribute(
        self, entity_id: str, attr_name: str, entity_type: str | None = None
    ) -> Attribute:
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        return await self._forward(
            self.store.retrieve_attribute_by_entity_id(entity_id, attr_name, entity_type)
        )

    async def update_attribute(
        self,
        entity_id: str,
        attr_name: str,
        attribute: Attribute,
        entity_type: str | None = None,
    ) -> None:
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        validate_attribute(attribute)
        await self._forward(
            self.store.update_attribute_by_entity_id(
                entity_id, attr_name, entity_type, attribute
            )
        )

    async def remove_attribute(
        self, entity_id: str, attr_name: str, entity_type: str | None = None
    ) -> None:
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        await self._forward(
            self.store.remove_attribute_by_entity_id(entity_id, attr_name, entity_type)
        )

    async def retrieve_attribute_value(
        self, entity_id: str, attr_name: str, entity_type: str | None = None
    ) -> Any:
        """Value for ``application/json`` clients: objects and arrays only."""
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        value = await self._forward(
            self.store.retrieve_attribute_value(entity_id, attr_name, entity_type)
        )
        return ensure_structured(value)

    async def retrieve_plain_text_attribute_value(
        self, entity_id: str, attr_name: str, entity_type: str | None = None
    ) -> str:
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        value = await self._forward(
            self.store.retrieve_attribute_value(entity_id, attr_name, entity_type)
        )
        return value_to_text(value)

    async def update_attribute_value(
        self,
        entity_id: str,
        attr_name: str,
        value: Any,
        entity_type: str | None = None,
    ) -> None:
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        await self._forward(
            self.store.update_attribute_value(entity_id, attr_name, entity_type, value)
        )

    async def update_plain_text_attribute_value(
        self,
        entity_id: str,
        attr_name: str,
        text: str,
        entity_type: str | None = None,
    ) -> None:
        self._validate_attribute_path(entity_id, attr_name, entity_type)
        value = text_to_value(text)
        await self._forward(
            self.store.update_attribute_value(entity_id, attr_name, entity_type, value)
        )

    # -- entity types --------------------------------------------------------

    async def list_entity_types(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        options: str | None = None,
    ) -> PageResponse[EntityType]:
        count = wants_count(options)
        page = await self._forward(
            self.store.retrieve_entity_types(limit=limit, offset=offset, count=count)
        )
        return to_page_response(page, count)

    async def retrieve_entity_type(self, entity_type: str) -> EntityType:
        validate_field(entity_type)
        return await self._forward(self.store.retrieve_entity_type(entity_type))

    # -- registrations -------------------------------------------------------

    async def list_registrations(self) -> list[Registration]:
        return await self._forward(self.store.list_registrations())

    async def create_registration(self, registration: Registration) -> Created:
        validate_registration(registration)
        registration_id = await self._forward(self.store.create_registration(registration))
        return Created(
            resource_id=registration_id,
            location=self._location("registrations", registration_id),
        )

    async def retrieve_registration(self, registration_id: str) -> Registration:
        validate_field(registration_id)
        return await self._forward(self.store.retrieve_registration(registration_id))

    async def update_registration(
        self, registration_id: str, registration: Registration
    ) -> None:
        validate_field(registration_id)
        validate_registration(registration)
        await self._forward(self.store.update_registration(registration_id, registration))

    async def remove_registration(self, registration_id: str) -> None:
        validate_field(registration_id)
        await self._forward(self.store.remove_registration(registration_id))

    # -- subscriptions -------------------------------------------------------

    async def list_subscriptions(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        options: str | None = None,
    ) -> PageResponse[Subscription]:
        page = await self._forward(self.store.list_subscriptions(limit=limit, offset=offset))
        return to_page_response(page, wants_count(options))

    async def create_subscription(self, subscription: Subscription) -> Created:
        validate_subscription(subscription)
        subscription_id = await self._forward(self.store.create_subscription(subscription))
        return Created(
            resource_id=subscription_id,
            location=self._location("subscriptions", subscription_id),
        )

    async def retrieve_subscription(self, subscription_id: str) -> Subscription:
        validate_field(subscription_id)
        return await self._forward(self.store.retrieve_subscription(subscription_id))

    async def update_subscription(
        self, subscription_id: str, subscription: Subscription
    ) -> None:
        validate_field(subscription_id)
        validate_subscription(subscription)
        await self._forward(self.store.update_subscription(subscription_id, subscription))

    async def remove_subscription(self, subscription_id: str) -> None:
        validate_field(subscription_id)
        await self._forward(self.store.remove_subscription(subscription_id))
