"""
Identifier generation for collections of application objects.

An identifier generator is any callable taking an object and its
occurrence index and returning an OPL identifier:

    def generator(obj, index: int) -> str: ...

It is called once per item of the input, in input order, with the index
starting at 0 and growing by one per call, duplicates included. Making
the returned names unique is the generator's job.

The default policy is a prefixed, zero-padded counter:

    enumerate_item_ids(["x", "y"], "di")  ->  {"x": "di_0000", "y": "di_0001"}
"""

from typing import Callable, Dict, Hashable, Iterable, TypeVar

T = TypeVar("T", bound=Hashable)

IdentifierGenerator = Callable[[T, int], str]


def format_identifier(prefix: str, index: int, padding: int = 4) -> str:
    """
    Build `<prefix>_<index>` with the index zero-padded to `padding` digits.

    An empty prefix still yields the leading underscore, e.g. `_0007`.
    """
    return f"{prefix}_{index:0{padding}d}"


def prefixed_counter(prefix: str, padding: int = 4) -> IdentifierGenerator:
    """
    Default identifier generator.

    The object itself is ignored; uniqueness comes from the counter alone,
    so objects need no meaningful equality or hash.
    """
    def generate(obj: object, index: int) -> str:
        return format_identifier(prefix, index, padding)

    return generate


def generate_item_ids(items: Iterable[T], generator: IdentifierGenerator) -> Dict[T, str]:
    """
    Generate an identifier for every item using a custom generator.

    Args:
        items: Objects to name; duplicates are allowed
        generator: Callable (obj, index) -> identifier

    Returns:
        Dict mapping each distinct object to an identifier.

    IMPORTANT:
        The result is keyed by object, so duplicates collapse: a repeated
        object keeps the position of its first occurrence and the
        identifier generated for its last occurrence. The generator is
        still called once per occurrence.
    """
    result: Dict[T, str] = {}
    for index, item in enumerate(items):
        result[item] = generator(item, index)
    return result


def enumerate_item_ids(items: Iterable[T], prefix: str, padding: int = 4) -> Dict[T, str]:
    """
    Generate `<prefix>_<counter>` identifiers for every item.

    Args:
        items: Objects to name
        prefix: Identifier prefix, may be empty
        padding: Minimum number of counter digits
            (a Document does not apply its config.id_padding on its own;
            pass doc.config.id_padding here to use it)

    Returns:
        Dict mapping each distinct object to its identifier
    """
    return generate_item_ids(items, prefixed_counter(prefix, padding))
