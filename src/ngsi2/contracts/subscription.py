# ngsi2/contracts/subscription.py
"""
Subscription contracts.

A subscription is a standing request to be notified when the subject
entities change, subject to a condition. Delivery is the context store's
business; this layer only validates and forwards.
"""
from __future__ import annotations

from typing import Any

from pydantic import Field

from ngsi2.contracts.entity import NgsiModel
from ngsi2.contracts.registration import SubjectEntity


class Condition(NgsiModel):
    attributes: list[str] | None = None
    expression: dict[str, str] | None = None


class SubjectSubscription(NgsiModel):
    entities: list[SubjectEntity] | None = None
    condition: Condition | None = None


class Notification(NgsiModel):
    attributes: list[str] | None = None
    callback: str | None = None
    headers: dict[str, str] | None = None
    query: dict[str, Any] | None = None
    attrs_format: str | None = Field(default=None, alias="attrsFormat")
    throttling: int | None = None
    times_sent: int | None = Field(default=None, alias="timesSent")
    last_notification: str | None = Field(default=None, alias="lastNotification")


class Subscription(NgsiModel):
    id: str | None = None
    description: str | None = None
    subject: SubjectSubscription | None = None
    notification: Notification | None = None
    expires: str | None = None
    status: str | None = None
