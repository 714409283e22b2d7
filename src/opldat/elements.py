"""
Data Elements for OPL data files

Every value written to a data file is one of a closed set of element
kinds:

    - ScalarConstant  (a string or integer literal)
    - FloatConstant   (a floating point literal)
    - SetElement      ({a,b,c})
    - TupleElement    (<a,b,c>)
    - IndexedArray    (#[key: value,...]#)

ARCHITECTURAL RULE:
    Elements are structure only.
    They carry no name and know nothing about text layout.
    Names are attached with NamedElement, rendering lives in
    opldat.backends.dat_writer.

Elements are frozen. A composite owns its children; building a new
container is the only way to change one.
"""

import math
from abc import ABC
from dataclasses import dataclass
from typing import Sequence, Tuple, Union


class Element(ABC):
    """
    Base class for all data elements.

    This class is structure only. It exists so containers and the
    renderer can tell elements apart from raw values.
    """
    pass


@dataclass(frozen=True)
class ScalarConstant(Element):
    """
    A single string or integer constant.

    Examples:
        ScalarConstant("test name")  ->  "test name"
        ScalarConstant(4)            ->  4

    Floats are rejected here; use FloatConstant so the literal is
    always written in fixed-point notation.
    """

    value: Union[str, int]

    def __post_init__(self) -> None:
        if not isinstance(self.value, (str, int)):
            raise TypeError(
                f"ScalarConstant holds str or int, got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class FloatConstant(Element):
    """
    A single floating point constant.

    Example:
        FloatConstant(15.0)  ->  15.0
    """

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(
                f"FloatConstant holds a number, got {type(self.value).__name__}"
            )
        try:
            value = float(self.value)
        except OverflowError as exc:
            raise ValueError(f"FloatConstant out of range: {self.value!r}") from exc
        if not math.isfinite(value):
            raise ValueError(f"FloatConstant must be finite, got {self.value!r}")
        object.__setattr__(self, "value", value)


SetItem = Union[str, int, float, Element]


def _reject_str_items(items: object, kind: str) -> None:
    if isinstance(items, str):
        raise TypeError(f"{kind} items must be a collection, not a single string")


def _raw_kind(item: object) -> str:
    # bool renders as an integer
    if isinstance(item, str):
        return "str"
    if isinstance(item, float):
        return "float"
    return "int"


def _check_set_item(item: object) -> None:
    if isinstance(item, Element):
        return
    if not isinstance(item, (str, int, float)):
        raise TypeError(f"Unsupported set item type: {type(item).__name__}")
    if isinstance(item, float) and not math.isfinite(item):
        raise ValueError(f"Set items must be finite, got {item!r}")


@dataclass(frozen=True)
class SetElement(Element):
    """
    An unordered collection without duplicates.

    Items are raw values (str, int, float) or other Elements. Raw strings
    are written bare, which suits sets of generated identifiers:

        SetElement(["a_0000", "a_0001"])  ->  {a_0000,a_0001}

    Duplicates are dropped on construction, keeping the first occurrence.
    Output order is the order of first insertion.

    Raw values must all be of one kind: strings, integers (bool counts as
    integer) or floats. Mixing them raises TypeError, since 1, 1.0 and True
    would otherwise collapse into one item.
    """

    items: Tuple[SetItem, ...] = ()

    def __post_init__(self) -> None:
        _reject_str_items(self.items, "SetElement")
        items = tuple(self.items)
        for item in items:
            _check_set_item(item)
        raw_kinds = {_raw_kind(item) for item in items if not isinstance(item, Element)}
        if len(raw_kinds) > 1:
            raise TypeError(f"Set mixes raw value kinds: {', '.join(sorted(raw_kinds))}")
        object.__setattr__(self, "items", tuple(dict.fromkeys(items)))

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class TupleElement(Element):
    """
    An ordered, fixed-arity group of elements.

    Children may be of different kinds:

        TupleElement([ScalarConstant(1), FloatConstant(2.5)])  ->  <1,2.5>
    """

    items: Tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        _reject_str_items(self.items, "TupleElement")
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Element):
                raise TypeError(f"Tuple items must be Elements, got {type(item).__name__}")
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class NamedElement:
    """
    Binds an identifier to an element.

    This is the only place a name lives. Top-level document entries and
    indexed array children are NamedElements.

    IMPORTANT:
        The name is not validated here. It must be a valid OPL identifier
        and unique within its document or array; see opldat.analyzer for
        an opt-in check.
    """

    name: str
    element: Element

    def __post_init__(self) -> None:
        if not isinstance(self.element, Element):
            raise TypeError(
                f"NamedElement wraps an Element, got {type(self.element).__name__}"
            )


@dataclass(frozen=True)
class IndexedArray(Element):
    """
    An ordered array whose children are keyed by their own names.

        IndexedArray([NamedElement("a", ScalarConstant(1))])  ->  #[a: 1]#
    """

    items: Tuple[NamedElement, ...] = ()

    def __post_init__(self) -> None:
        _reject_str_items(self.items, "IndexedArray")
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, NamedElement):
                raise TypeError(
                    f"IndexedArray items must be NamedElements, got {type(item).__name__}"
                )
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def keys(self) -> Sequence[str]:
        return [item.name for item in self.items]
