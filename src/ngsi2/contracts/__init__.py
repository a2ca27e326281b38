"""Public contracts for the NGSI v2 request layer."""
from ngsi2.contracts.entity import Attribute, AttributeType, Entity, EntityType, Metadata
from ngsi2.contracts.errors import (
    BadRequest,
    ConflictingEntities,
    ErrorBody,
    IllegalArgument,
    IncompatibleParameter,
    InvalidSyntax,
    NotAcceptable,
    ProtocolError,
    UnsupportedOperation,
)
from ngsi2.contracts.geo import Coordinate, GeoQuery, Geometry, Modifier, Relation
from ngsi2.contracts.registration import Registration, SubjectEntity, SubjectRegistration
from ngsi2.contracts.results import Created, PageResponse, Paginated
from ngsi2.contracts.subscription import (
    Condition,
    Notification,
    SubjectSubscription,
    Subscription,
)

__all__ = [
    "Attribute", "AttributeType", "Entity", "EntityType", "Metadata",
    "ProtocolError", "ErrorBody", "UnsupportedOperation", "BadRequest",
    "IncompatibleParameter", "InvalidSyntax", "ConflictingEntities",
    "NotAcceptable", "IllegalArgument",
    "Coordinate", "GeoQuery", "Geometry", "Modifier", "Relation",
    "Registration", "SubjectEntity", "SubjectRegistration",
    "Subscription", "SubjectSubscription", "Condition", "Notification",
    "Paginated", "PageResponse", "Created",
]
