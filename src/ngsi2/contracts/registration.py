# ngsi2/contracts/registration.py
"""
Registration contracts.

A registration declares that an external context provider holds data for
a subject set of entities and attributes.
"""
from __future__ import annotations

from pydantic import Field

from ngsi2.contracts.entity import Metadata, NgsiModel


class SubjectEntity(NgsiModel):
    id: str | None = None
    id_pattern: str | None = Field(default=None, alias="idPattern")
    type: str | None = None
    type_pattern: str | None = Field(default=None, alias="typePattern")


class SubjectRegistration(NgsiModel):
    entities: list[SubjectEntity] | None = None
    attributes: list[str] | None = None


class Registration(NgsiModel):
    id: str | None = None
    subject: SubjectRegistration | None = None
    callback: str | None = None
    metadata: dict[str, Metadata] | None = None
    duration: str | None = None
