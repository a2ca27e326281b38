# ngsi2/core/store/base.py
"""
ContextStore - the collaborator that owns entities, registrations and
subscriptions.

The request layer validates and parses every request, then forwards it to
the configured store. Each operation has a default implementation that
raises ``UnsupportedOperation`` (answered with ``501 Not Implemented``), so
a store overrides only the subset of the protocol it supports.

Stores may raise any ``ProtocolError`` (typically ``ConflictingEntities``
when an entity id is ambiguous); those reach the client unchanged. A
``ValueError`` is reported as ``IllegalArgument``. Anything else is a
server failure.
"""
from __future__ import annotations

import logging
from abc import ABC
from typing import Any

from ngsi2.contracts.entity import Attribute, Entity, EntityType
from ngsi2.contracts.errors import UnsupportedOperation
from ngsi2.contracts.geo import GeoQuery
from ngsi2.contracts.registration import Registration
from ngsi2.contracts.results import Paginated
from ngsi2.contracts.subscription import Subscription

logger = logging.getLogger(__name__)


class ContextStore(ABC):
    """Base class for context stores.

    Override points
    ~~~~~~~~~~~~~~~
    * entities: ``list_entities``, ``create_entity``, ``retrieve_entity``,
      ``update_or_append_entity``, ``update_existing_entity_attributes``,
      ``replace_all_entity_attributes``, ``remove_entity``.
    * attributes: ``retrieve_attribute_by_entity_id``,
      ``update_attribute_by_entity_id``, ``remove_attribute_by_entity_id``,
      ``retrieve_attribute_value``, ``update_attribute_value``.
    * types: ``retrieve_entity_types``, ``retrieve_entity_type``.
    * registrations and subscriptions: list / create / retrieve / update /
      remove.
    * ``on_startup`` / ``on_shutdown`` lifecycle hooks.
    """

    # -- lifecycle -----------------------------------------------------------

    async def on_startup(self) -> None:
        """Called once when the application starts."""
        pass

    async def on_shutdown(self) -> None:
        pass

    # -- api resources -------------------------------------------------------

    async def list_resources(self) -> dict[str, str]:
        """Map of resource name to URL for the ``/v2`` entry point."""
        raise UnsupportedOperation("Retrieve API Resources")

    # -- entities ------------------------------------------------------------

    async def list_entities(
        self,
        *,
        ids: str | None,
        types: str | None,
        id_pattern: str | None,
        limit: int | None,
        offset: int | None,
        attrs: str | None,
        query: str | None,
        geo_query: GeoQuery | None,
        order_by: list[str] | None,
    ) -> Paginated[Entity]:
        """Return the entities matching all given criteria.

        ``ids``, ``types`` and ``attrs`` are the raw comma-separated values;
        every token has already passed field validation.
        """
        raise UnsupportedOperation("List Entities")

    async def create_entity(self, entity: Entity) -> None:
        raise UnsupportedOperation("Create Entity")

    async def retrieve_entity(self, entity_id: str, attrs: str | None) -> Entity:
        raise UnsupportedOperation("Retrieve Entity")

    async def update_or_append_entity(
        self, entity_id: str, attributes: dict[str, Attribute]
    ) -> None:
        raise UnsupportedOperation("Update Or Append Entity")

    async def update_existing_entity_attributes(
        self, entity_id: str, attributes: dict[str, Attribute]
    ) -> None:
        """Update attributes that must already exist on the entity."""
        raise UnsupportedOperation("Update Existing Entity Attributes")

    async def replace_all_entity_attributes(
        self, entity_id: str, attributes: dict[str, Attribute]
    ) -> None:
        raise UnsupportedOperation("Replace All Entity Attributes")

    async def remove_entity(self, entity_id: str) -> None:
        raise UnsupportedOperation("Remove Entity")

    # -- entity types --------------------------------------------------------

    async def retrieve_entity_types(
        self, *, limit: int | None, offset: int | None, count: bool
    ) -> Paginated[EntityType]:
        raise UnsupportedOperation("Retrieve Entity Types")

    async def retrieve_entity_type(self, entity_type: str) -> EntityType:
        raise UnsupportedOperation("Retrieve Entity Type")

    # -- attributes ----------------------------------------------------------

    async def retrieve_attribute_by_entity_id(
        self, entity_id: str, attr_name: str, entity_type: str | None
    ) -> Attribute:
        """``entity_type`` disambiguates entities sharing the same id."""
        raise UnsupportedOperation("Retrieve Attribute by Entity ID")

    async def update_attribute_by_entity_id(
        self,
        entity_id: str,
        attr_name: str,
        entity_type: str | None,
        attribute: Attribute,
    ) -> None:
        raise UnsupportedOperation("Update Attribute by Entity ID")

    async def remove_attribute_by_entity_id(
        self, entity_id: str, attr_name: str, entity_type: str | None
    ) -> None:
        raise UnsupportedOperation("Remove Attribute")

    async def retrieve_attribute_value(
        self, entity_id: str, attr_name: str, entity_type: str | None
    ) -> Any:
        raise UnsupportedOperation("Retrieve Attribute Value")

    async def update_attribute_value(
        self, entity_id: str, attr_name: str, entity_type: str | None, value: Any
    ) -> None:
        raise UnsupportedOperation("Update Attribute Value")

    # -- registrations -------------------------------------------------------

    async def list_registrations(self) -> list[Registration]:
        raise UnsupportedOperation("Retrieve Registrations")

    async def create_registration(self, registration: Registration) -> str | None:
        """Store a registration; return its id when the store assigns one."""
        raise UnsupportedOperation("Create Registration")

    async def retrieve_registration(self, registration_id: str) -> Registration:
        raise UnsupportedOperation("Retrieve Registration")

    async def update_registration(
        self, registration_id: str, registration: Registration
    ) -> None:
        raise UnsupportedOperation("Update Registration")

    async def remove_registration(self, registration_id: str) -> None:
        raise UnsupportedOperation("Remove Registration")

    # -- subscriptions -------------------------------------------------------

    async def list_subscriptions(
        self, *, limit: int | None, offset: int | None
    ) -> Paginated[Subscription]:
        raise UnsupportedOperation("List Subscriptions")

    async def create_subscription(self, subscription: Subscription) -> str | None:
        """Store a subscription; return its id when the store assigns one."""
        raise UnsupportedOperation("Create Subscription")

    async def retrieve_subscription(self, subscription_id: str) -> Subscription:
        raise UnsupportedOperation("Retrieve Subscription")

    async def update_subscription(
        self, subscription_id: str, subscription: Subscription
    ) -> None:
        raise UnsupportedOperation("Update Subscription")

    async def remove_subscription(self, subscription_id: str) -> None:
        raise UnsupportedOperation("Remove Subscription")
