"""Record model: attributes, items, item tuples and record sets."""

from .attributes import (
    Attribute,
    ContinuousAttribute,
    DiscreteAttribute,
    infer_attribute,
    validate_schema
)

from .items import (
    Item,
    ContinuousItem,
    DiscreteItem,
    SupportsDistance,
    make_item
)

from .tuples import ItemTuple
from .record_set import RecordSet

__all__ = [
    # Attributes
    'Attribute',
    'ContinuousAttribute',
    'DiscreteAttribute',
    'infer_attribute',
    'validate_schema',

    # Items
    'Item',
    'ContinuousItem',
    'DiscreteItem',
    'SupportsDistance',
    'make_item',

    # Records
    'ItemTuple',
    'RecordSet'
]
