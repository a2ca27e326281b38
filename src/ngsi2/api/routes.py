# ngsi2/api/routes.py
"""
NGSI v2 HTTP surface.

Thin dispatch layer: every handler decodes its inputs, calls the matching
``RequestContract`` operation and turns the result into a response. All
protocol rules live in the contract; errors are rendered by the handlers
installed in ``ngsi2.api.errors``.

URL structure (under the configured prefix, ``/v2`` by default)::

    /
    /entities
    /entities/{entity_id}
    /entities/{entity_id}/attrs/{attr_name}
    /entities/{entity_id}/attrs/{attr_name}/value
    /types
    /types/{entity_type}
    /registrations
    /registrations/{registration_id}
    /subscriptions
    /subscriptions/{subscription_id}
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ngsi2.api.dependencies import get_contract
from ngsi2.api.errors import PLAIN_TEXT, accepts_plain_text
from ngsi2.contracts.entity import Attribute, Entity
from ngsi2.contracts.errors import BadRequest
from ngsi2.contracts.registration import Registration
from ngsi2.contracts.results import Created
from ngsi2.contracts.subscription import Subscription
from ngsi2.core.contract import RequestContract

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ngsi-v2"])


def _created(created: Created) -> Response:
    return Response(status_code=201, headers=created.headers)


def _no_content() -> Response:
    return Response(status_code=204)


# -- api resources -----------------------------------------------------------


@router.get("/", operation_id="list_resources")
async def list_resources(contract: RequestContract = Depends(get_contract)) -> JSONResponse:
    return JSONResponse(await contract.list_resources())


# -- entities ----------------------------------------------------------------


@router.get("/entities", operation_id="list_entities")
async def list_entities(
    contract: RequestContract = Depends(get_contract),
    ids: str | None = Query(default=None, alias="id"),
    types: str | None = Query(default=None, alias="type"),
    id_pattern: str | None = Query(default=None, alias="idPattern"),
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    attrs: str | None = None,
    query: str | None = None,
    georel: str | None = None,
    geometry: str | None = None,
    coords: str | None = None,
    order_by: str | None = Query(default=None, alias="orderBy"),
    options: str | None = None,
) -> JSONResponse:
    page = await contract.list_entities(
        ids=ids,
        types=types,
        id_pattern=id_pattern,
        limit=limit,
        offset=offset,
        attrs=attrs,
        query=query,
        georel=georel,
        geometry=geometry,
        coords=coords,
        order_by=order_by.split(",") if order_by is not None else None,
        options=options,
    )
    return JSONResponse([e.to_wire() for e in page.items], headers=page.headers)


@router.post("/entities", operation_id="create_entity")
async def create_entity(
    entity: Entity,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    return _created(await contract.create_entity(entity))


@router.get("/entities/{entity_id}", operation_id="retrieve_entity")
async def retrieve_entity(
    entity_id: str,
    attrs: str | None = None,
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    entity = await contract.retrieve_entity(entity_id, attrs)
    return JSONResponse(entity.to_wire())


@router.post("/entities/{entity_id}", operation_id="update_or_append_entity")
async def update_or_append_entity(
    entity_id: str,
    attributes: dict[str, Attribute] = Body(...),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.update_or_append_entity(entity_id, attributes)
    return _no_content()


@router.patch("/entities/{entity_id}", operation_id="update_existing_entity_attributes")
async def update_existing_entity_attributes(
    entity_id: str,
    attributes: dict[str, Attribute] = Body(...),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.update_existing_entity_attributes(entity_id, attributes)
    return _no_content()


@router.put("/entities/{entity_id}", operation_id="replace_all_entity_attributes")
async def replace_all_entity_attributes(
    entity_id: str,
    attributes: dict[str, Attribute] = Body(...),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.replace_all_entity_attributes(entity_id, attributes)
    return _no_content()


@router.delete("/entities/{entity_id}", operation_id="remove_entity")
async def remove_entity(
    entity_id: str,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.remove_entity(entity_id)
    return _no_content()


# -- attributes --------------------------------------------------------------

attr_path = "/entities/{entity_id}/attrs/{attr_name}"


@router.get(attr_path, operation_id="retrieve_attribute")
async def retrieve_attribute(
    entity_id: str,
    attr_name: str,
    entity_type: str | None = Query(default=None, alias="type"),
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    attribute = await contract.retrieve_attribute(entity_id, attr_name, entity_type)
    return JSONResponse(attribute.to_wire())


@router.put(attr_path, operation_id="update_attribute")
async def update_attribute(
    entity_id: str,
    attr_name: str,
    attribute: Attribute,
    entity_type: str | None = Query(default=None, alias="type"),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.update_attribute(entity_id, attr_name, attribute, entity_type)
    return _no_content()


@router.delete(attr_path, operation_id="remove_attribute")
async def remove_attribute(
    entity_id: str,
    attr_name: str,
    entity_type: str | None = Query(default=None, alias="type"),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.remove_attribute(entity_id, attr_name, entity_type)
    return _no_content()


@router.get(attr_path + "/value", operation_id="retrieve_attribute_value")
async def retrieve_attribute_value(
    entity_id: str,
    attr_name: str,
    request: Request,
    entity_type: str | None = Query(default=None, alias="type"),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    if accepts_plain_text(request.headers.get("accept")):
        text = await contract.retrieve_plain_text_attribute_value(
            entity_id, attr_name, entity_type
        )
        return PlainTextResponse(text)
    value = await contract.retrieve_attribute_value(entity_id, attr_name, entity_type)
    return JSONResponse(value)


@router.put(attr_path + "/value", operation_id="update_attribute_value")
async def update_attribute_value(
    entity_id: str,
    attr_name: str,
    request: Request,
    entity_type: str | None = Query(default=None, alias="type"),
    contract: RequestContract = Depends(get_contract),
) -> Response:
    raw = await request.body()
    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(PLAIN_TEXT):
            await contract.update_plain_text_attribute_value(
                entity_id, attr_name, raw.decode("utf-8"), entity_type
            )
        else:
            await contract.update_attribute_value(
                entity_id, attr_name, json.loads(raw), entity_type
            )
    except UnicodeDecodeError as exc:
        raise BadRequest(f"Request body is not valid UTF-8: {exc.reason}") from exc
    except json.JSONDecodeError as exc:
        raise BadRequest(f"Request body is not valid JSON: {exc.msg}") from exc
    return _no_content()


# -- entity types ------------------------------------------------------------


@router.get("/types", operation_id="list_entity_types")
async def list_entity_types(
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    options: str | None = None,
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    page = await contract.list_entity_types(limit=limit, offset=offset, options=options)
    return JSONResponse([t.to_wire() for t in page.items], headers=page.headers)


@router.get("/types/{entity_type}", operation_id="retrieve_entity_type")
async def retrieve_entity_type(
    entity_type: str,
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    return JSONResponse((await contract.retrieve_entity_type(entity_type)).to_wire())


# -- registrations -----------------------------------------------------------


@router.get("/registrations", operation_id="list_registrations")
async def list_registrations(
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    return JSONResponse([r.to_wire() for r in await contract.list_registrations()])


@router.post("/registrations", operation_id="create_registration")
async def create_registration(
    registration: Registration,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    return _created(await contract.create_registration(registration))


@router.get("/registrations/{registration_id}", operation_id="retrieve_registration")
async def retrieve_registration(
    registration_id: str,
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    return JSONResponse((await contract.retrieve_registration(registration_id)).to_wire())


@router.patch("/registrations/{registration_id}", operation_id="update_registration")
async def update_registration(
    registration_id: str,
    registration: Registration,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.update_registration(registration_id, registration)
    return _no_content()


@router.delete("/registrations/{registration_id}", operation_id="remove_registration")
async def remove_registration(
    registration_id: str,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.remove_registration(registration_id)
    return _no_content()


# -- subscriptions -----------------------------------------------------------


@router.get("/subscriptions", operation_id="list_subscriptions")
async def list_subscriptions(
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    options: str | None = None,
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    page = await contract.list_subscriptions(limit=limit, offset=offset, options=options)
    return JSONResponse([s.to_wire() for s in page.items], headers=page.headers)


@router.post("/subscriptions", operation_id="create_subscription")
async def create_subscription(
    subscription: Subscription,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    return _created(await contract.create_subscription(subscription))


@router.get("/subscriptions/{subscription_id}", operation_id="retrieve_subscription")
async def retrieve_subscription(
    subscription_id: str,
    contract: RequestContract = Depends(get_contract),
) -> JSONResponse:
    return JSONResponse((await contract.retrieve_subscription(subscription_id)).to_wire())


@router.patch("/subscriptions/{subscription_id}", operation_id="update_subscription")
async def update_subscription(
    subscription_id: str,
    subscription: Subscription,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.update_subscription(subscription_id, subscription)
    return _no_content()


@router.delete("/subscriptions/{subscription_id}", operation_id="remove_subscription")
async def remove_subscription(
    subscription_id: str,
    contract: RequestContract = Depends(get_contract),
) -> Response:
    await contract.remove_subscription(subscription_id)
    return _no_content()
