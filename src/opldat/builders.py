"""
Composite builders.

Turn a mapping of application objects to identifiers into a named
indexed array. The mapping's iteration order is the array's order, so
pass an insertion-ordered dict (as returned by generate_item_ids) when
the output order matters.

Neither builder checks that the produced children share a kind or a
tuple arity. Keeping arrays homogeneous is up to the mapper.
"""

import logging
from typing import Callable, Mapping, Sequence, TypeVar

from opldat.elements import Element, IndexedArray, NamedElement, TupleElement

logger = logging.getLogger(__name__)

T = TypeVar("T")

ElementMapper = Callable[[T], Element]
TupleMapper = Callable[[T], Sequence[Element]]


def build_indexed_array(name: str, items: Mapping[T, str], element_mapper: ElementMapper) -> NamedElement:
    """
    Build an indexed array with one child per mapping entry.

    Args:
        name: Name of the array itself
        items: Objects mapped to their identifiers
        element_mapper: Callable turning one object into an Element

    Returns:
        NamedElement wrapping the IndexedArray; each child is named with
        its object's identifier
    """
    children = [
        NamedElement(identifier, element_mapper(obj))
        for obj, identifier in items.items()
    ]
    logger.debug("Built indexed array %s with %d items", name, len(children))
    return NamedElement(name, IndexedArray(children))


def build_tuple_array(name: str, items: Mapping[T, str], tuple_mapper: TupleMapper) -> NamedElement:
    """
    Build an indexed array of tuples, one tuple per mapping entry.

    Args:
        name: Name of the array itself
        items: Objects mapped to their identifiers
        tuple_mapper: Callable turning one object into the ordered list of
            Elements that make up its tuple

    Returns:
        NamedElement wrapping an IndexedArray of TupleElements
    """
    return build_indexed_array(name, items, lambda obj: TupleElement(tuple_mapper(obj)))
