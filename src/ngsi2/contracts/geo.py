# ngsi2/contracts/geo.py
"""
Geo-query contracts.

A geo-query is the parsed form of the ``georel``, ``geometry`` and
``coords`` query parameters of the entity listing operation.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Relation(str, Enum):
    near = "near"
    coveredBy = "coveredBy"
    intersects = "intersects"
    equals = "equals"
    disjoint = "disjoint"


class Modifier(str, Enum):
    minDistance = "minDistance"
    maxDistance = "maxDistance"


class Geometry(str, Enum):
    point = "point"
    line = "line"
    polygon = "polygon"
    box = "box"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoQuery:
    """Spatial filter forwarded to the context store.

    Attributes:
        relation: Spatial relation between stored entities and the shape.
        geometry: Shape described by ``coordinates``.
        coordinates: Coordinate pairs in the order they were given.
        modifier: Distance constraint kind, only for ``near``.
        distance: Distance in meters, set together with ``modifier``.
    """

    relation: Relation
    geometry: Geometry
    coordinates: tuple[Coordinate, ...]
    modifier: Modifier | None = None
    distance: float | None = None
