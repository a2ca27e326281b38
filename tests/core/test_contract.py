# tests/core/test_contract.py
"""
Unit tests for the request contract orchestration.
"""
from __future__ import annotations

import pytest

from helpers.fake_store import BCN_WELT, registration_reference
from ngsi2.contracts import (
    Attribute,
    BadRequest,
    ConflictingEntities,
    Entity,
    IllegalArgument,
    IncompatibleParameter,
    InvalidSyntax,
    Modifier,
    NotAcceptable,
    Relation,
    Subscription,
    UnsupportedOperation,
)
from ngsi2.core.contract import RequestContract
from ngsi2.core.store import ContextStore


class _RejectingStore(ContextStore):
    async def retrieve_entity(self, entity_id: str, attrs: str | None) -> Entity:
        raise ValueError("attrs list too long")


class _BrokenStore(ContextStore):
    async def remove_entity(self, entity_id: str) -> None:
        raise TimeoutError("store did not answer")


class TestListEntities:
    @pytest.mark.asyncio
    async def test_forwards_parsed_geo_query(self, contract, store):
        page = await contract.list_entities(
            georel="near;maxDistance:2000",
            geometry="point",
            coords="40.418889,-3.691944",
            order_by=["temperature"],
        )
        assert len(page.items) == 2
        _, kwargs = store.last_call
        geo = kwargs["geo_query"]
        assert geo.relation is Relation.near
        assert geo.modifier is Modifier.maxDistance
        assert geo.distance == 2000.0
        assert kwargs["order_by"] == ["temperature"]

    @pytest.mark.asyncio
    async def test_no_geo_query(self, contract, store):
        await contract.list_entities(ids=BCN_WELT)
        _, kwargs = store.last_call
        assert kwargs["geo_query"] is None
        assert kwargs["ids"] == BCN_WELT

    @pytest.mark.asyncio
    async def test_id_and_id_pattern_exclusive(self, contract, store):
        with pytest.raises(IncompatibleParameter) as exc_info:
            await contract.list_entities(ids="Bcn-Welt", id_pattern="Bcn-.*")
        assert exc_info.value.operation == "List entities"
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_partial_geo_triad(self, contract, store):
        with pytest.raises(BadRequest):
            await contract.list_entities(georel="near")
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_invalid_identifier_short_circuits(self, contract, store):
        with pytest.raises(InvalidSyntax):
            await contract.list_entities(types="Room,Ca#r", georel="bad")
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_count_header(self, contract):
        page = await contract.list_entities(options="count")
        assert len(page.items) == 2
        assert page.headers == {"X-Total-Count": "5"}

    @pytest.mark.asyncio
    async def test_no_count_header(self, contract):
        page = await contract.list_entities(options="keyValues")
        assert page.headers == {}


class TestEntities:
    @pytest.mark.asyncio
    async def test_create_returns_location(self, contract, store):
        created = await contract.create_entity(Entity(id="Bcn-Welt", type="Room"))
        assert created.resource_id == "Bcn-Welt"
        assert created.location == "/v2/entities/Bcn-Welt"
        assert created.headers == {"Location": "/v2/entities/Bcn-Welt"}
        assert store.last_call[0] == "create_entity"

    @pytest.mark.asyncio
    async def test_create_requires_id(self, contract, store):
        with pytest.raises(BadRequest):
            await contract.create_entity(Entity(type="Room"))
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_location_uses_prefix(self, store):
        contract = RequestContract(store, api_prefix="/ngsi/v2/")
        created = await contract.create_entity(Entity(id="Bcn-Welt"))
        assert created.location == "/ngsi/v2/entities/Bcn-Welt"

    @pytest.mark.asyncio
    async def test_conflict_passes_through(self, contract):
        with pytest.raises(ConflictingEntities) as exc_info:
            await contract.retrieve_entity("Boe-Idearium")
        assert exc_info.value.entity_id == "Boe-Idearium"

    @pytest.mark.asyncio
    async def test_attribute_names_validated(self, contract, store):
        with pytest.raises(InvalidSyntax):
            await contract.update_or_append_entity("Bcn-Welt", {"temp/1": Attribute(value=1)})
        assert store.calls == []


class TestAttributeValues:
    @pytest.mark.asyncio
    async def test_structured_value(self, contract):
        value = await contract.retrieve_attribute_value("Bcn-Welt", "address")
        assert value["city"] == "Madrid"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attr_name", ["temperature", "on", "color", "hello"])
    async def test_scalar_not_acceptable_as_json(self, contract, attr_name):
        with pytest.raises(NotAcceptable):
            await contract.retrieve_attribute_value("Bcn-Welt", attr_name)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "attr_name,expected",
        [("temperature", "25.0"), ("on", "true"), ("color", "null"), ("hello", '"hello, world"')],
    )
    async def test_plain_text_value(self, contract, attr_name, expected):
        assert await contract.retrieve_plain_text_attribute_value("Bcn-Welt", attr_name) == expected

    @pytest.mark.asyncio
    async def test_plain_text_update_is_decoded(self, contract, store):
        await contract.update_plain_text_attribute_value("Bcn-Welt", "temperature", "25.5")
        _, kwargs = store.last_call
        assert kwargs["value"] == 25.5

    @pytest.mark.asyncio
    async def test_plain_text_update_rejects_garbage(self, contract, store):
        with pytest.raises(NotAcceptable):
            await contract.update_plain_text_attribute_value("Bcn-Welt", "temperature", "hot")
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_entity_type_validated(self, contract):
        with pytest.raises(InvalidSyntax):
            await contract.retrieve_attribute("Bcn-Welt", "temperature", entity_type="Ro om")


class TestCollaboratorFailures:
    @pytest.mark.asyncio
    async def test_default_operation_unsupported(self):
        contract = RequestContract(ContextStore())
        with pytest.raises(UnsupportedOperation) as exc_info:
            await contract.list_subscriptions()
        assert exc_info.value.operation_name == "List Subscriptions"

    @pytest.mark.asyncio
    async def test_value_error_becomes_illegal_argument(self):
        contract = RequestContract(_RejectingStore())
        with pytest.raises(IllegalArgument, match="attrs list too long"):
            await contract.retrieve_entity("Bcn-Welt")

    @pytest.mark.asyncio
    async def test_other_failures_not_masked(self):
        contract = RequestContract(_BrokenStore())
        with pytest.raises(TimeoutError):
            await contract.remove_entity("Bcn-Welt")


class TestSubscriptionsAndRegistrations:
    @pytest.mark.asyncio
    async def test_create_subscription_location(self, contract):
        created = await contract.create_subscription(Subscription())
        assert created.location == "/v2/subscriptions/abcdefg"

    @pytest.mark.asyncio
    async def test_create_registration_without_id(self, contract):
        created = await contract.create_registration(registration_reference())
        assert created.resource_id is None
        assert created.headers == {}

    @pytest.mark.asyncio
    async def test_list_subscriptions_count(self, contract):
        page = await contract.list_subscriptions(options="count")
        assert len(page.items) == 2
        assert page.headers == {"X-Total-Count": "2"}

    @pytest.mark.asyncio
    async def test_entity_types_count_forwarded(self, contract, store):
        page = await contract.list_entity_types(options="count,values", limit=10)
        _, kwargs = store.last_call
        assert kwargs["count"] is True
        assert kwargs["limit"] == 10
        assert page.headers == {"X-Total-Count": "12"}
