# ngsi2/core/syntax.py
"""
Field syntax validation.

Every identifier entering the system (entity id and type, attribute names
and types, metadata names and types, registration and subscription subject
fields) must be at most 256 characters long and drawn from printable ASCII
minus whitespace, ``&``, ``?``, ``/`` and ``#``. Identifiers are never
normalized: the first offending value is reported as ``InvalidSyntax``.
"""
from __future__ import annotations

import re
from typing import Iterable, Mapping

from ngsi2.contracts.entity import Attribute, Entity, Metadata
from ngsi2.contracts.errors import InvalidSyntax
from ngsi2.contracts.registration import Registration, SubjectEntity
from ngsi2.contracts.subscription import Subscription

MAX_FIELD_LENGTH = 256
FIELD_PATTERN = re.compile(r"[\x21\x22\x24\x25\x27-\x2E\x30-\x3E\x40-\x7E]*")


def validate_field(field: str) -> None:
    if len(field) > MAX_FIELD_LENGTH or FIELD_PATTERN.fullmatch(field) is None:
        raise InvalidSyntax(field)


def validate_fields(fields: Iterable[str]) -> None:
    for field in fields:
        validate_field(field)


def validate_query_lists(
    ids: str | None = None,
    types: str | None = None,
    attrs: str | None = None,
) -> None:
    """Validate comma-separated ``id``, ``type`` and ``attrs`` query parameters.

    Each token is checked on its own, empty tokens included (``a,,b``).
    """
    for value in (ids, types, attrs):
        if value is not None:
            validate_fields(value.split(","))


def validate_metadata(metadata: Mapping[str, Metadata] | None) -> None:
    if not metadata:
        return
    validate_fields(metadata.keys())
    for item in metadata.values():
        if item.type is not None:
            validate_field(item.type)


def validate_attribute(attribute: Attribute) -> None:
    if attribute.type is not None:
        validate_field(attribute.type)
    validate_metadata(attribute.metadata)


def validate_attributes(attributes: Mapping[str, Attribute] | None) -> None:
    if not attributes:
        return
    validate_fields(attributes.keys())
    for attribute in attributes.values():
        validate_attribute(attribute)


def validate_entity(entity: Entity) -> None:
    if entity.id is not None:
        validate_field(entity.id)
    if entity.type is not None:
        validate_field(entity.type)
    validate_attributes(entity.attributes)


def validate_subject_entities(entities: Iterable[SubjectEntity] | None) -> None:
    for subject in entities or ():
        if subject.id is not None:
            validate_field(subject.id)
        if subject.type is not None:
            validate_field(subject.type)


def validate_registration(registration: Registration) -> None:
    subject = registration.subject
    if subject is not None:
        validate_subject_entities(subject.entities)
        validate_fields(subject.attributes or ())
    validate_metadata(registration.metadata)


def validate_subscription(subscription: Subscription) -> None:
    subject = subscription.subject
    if subject is not None:
        validate_subject_entities(subject.entities)
        if subject.condition is not None:
            validate_fields(subject.condition.attributes or ())
    notification = subscription.notification
    if notification is not None:
        validate_fields(notification.attributes or ())
