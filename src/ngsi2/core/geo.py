# ngsi2/core/geo.py
"""
Geo-query parser.

Turns the correlated ``georel``, ``geometry`` and ``coords`` query
parameters into a ``GeoQuery``::

    georel=near;maxDistance:2000  geometry=point  coords=40.418889,-3.691944

The three parameters go together: either all are present or none is.
"""
from __future__ import annotations

import logging
import re

from ngsi2.contracts.errors import BadRequest, InvalidSyntax
from ngsi2.contracts.geo import Coordinate, GeoQuery, Geometry, Modifier, Relation
from ngsi2.core.numbers import parse_decimal, parse_float32

logger = logging.getLogger(__name__)

_COORD_SEPARATOR = re.compile(r"\s*,\s*")
_GROUP_SEPARATOR = re.compile(";")
_MODIFIER_SEPARATOR = re.compile(":")


def _split(separator: re.Pattern, text: str) -> list[str]:
    """Split on ``separator``, dropping trailing empty tokens (``"1,2;"`` is one group)."""
    tokens = separator.split(text)
    while len(tokens) > 1 and not tokens[-1]:
        tokens.pop()
    return tokens


def parse_geometry(geometry: str) -> Geometry:
    try:
        return Geometry(geometry)
    except ValueError:
        raise InvalidSyntax(geometry) from None


def parse_coordinates(coords: str) -> tuple[Coordinate, ...]:
    """Parse ``lat,lon;lat,lon;...`` keeping the given order and duplicates."""
    coordinates: list[Coordinate] = []
    for group in _split(_GROUP_SEPARATOR, coords):
        tokens = _split(_COORD_SEPARATOR, group)
        if len(tokens) != 2:
            raise InvalidSyntax("coords")
        try:
            latitude, longitude = (parse_decimal(t) for t in tokens)
        except ValueError:
            raise InvalidSyntax("coords") from None
        coordinates.append(Coordinate(latitude=latitude, longitude=longitude))
    return tuple(coordinates)


def _parse_distance_modifier(segment: str) -> tuple[Modifier, float]:
    tokens = _split(_MODIFIER_SEPARATOR, segment)
    if len(tokens) != 2:
        raise InvalidSyntax(segment)
    try:
        modifier = Modifier(tokens[0])
        distance = parse_float32(tokens[1])
    except ValueError:
        raise InvalidSyntax(segment) from None
    if distance < 0:
        raise InvalidSyntax(segment)
    return modifier, distance


def parse_geo_query(georel: str, geometry: str, coords: str) -> GeoQuery:
    """Parse a complete geo-query.

    Raises:
        InvalidSyntax: naming the relation segment, the modifier segment,
            the geometry, or ``coords``, whichever is malformed first.
    """
    segments = _split(_GROUP_SEPARATOR, georel)
    try:
        relation = Relation(segments[0])
    except ValueError:
        raise InvalidSyntax(segments[0]) from None

    modifier: Modifier | None = None
    distance: float | None = None
    # extra segments on relations other than near carry no meaning
    if relation is Relation.near and len(segments) > 1:
        modifier, distance = _parse_distance_modifier(segments[1])

    query = GeoQuery(
        relation=relation,
        geometry=parse_geometry(geometry),
        coordinates=parse_coordinates(coords),
        modifier=modifier,
        distance=distance,
    )
    logger.debug("Parsed geo-query %s", query)
    return query


def geo_query_from_params(
    georel: str | None,
    geometry: str | None,
    coords: str | None,
) -> GeoQuery | None:
    """Apply the all-or-nothing rule, then parse.

    Returns ``None`` when none of the three parameters is given.
    """
    triad = (georel, geometry, coords)
    if all(p is None for p in triad):
        return None
    if georel is None or geometry is None or coords is None:
        raise BadRequest("Missing one argument of georel, geometry or coords")
    return parse_geo_query(georel, geometry, coords)
