"""
Serialization helpers for opldat objects (Element, NamedElement, Document).

Provides lossless JSON/YAML round-trip via intermediate dict representation,
so document definitions can be stored and rebuilt before rendering.
This is not a reader for `.dat` files.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from opldat.config import config_from_dict, config_to_dict
from opldat.elements import (
    Element,
    FloatConstant,
    IndexedArray,
    NamedElement,
    ScalarConstant,
    SetElement,
    TupleElement,
)
from opldat.errors import SerializationError
from opldat.model import Document


def element_to_dict(element: Element) -> Dict[str, Any]:
    if isinstance(element, ScalarConstant):
        return {"type": "scalar", "value": element.value}
    if isinstance(element, FloatConstant):
        return {"type": "float", "value": element.value}
    if isinstance(element, SetElement):
        return {
            "type": "set",
            "items": [
                element_to_dict(item) if isinstance(item, Element) else item
                for item in element.items
            ],
        }
    if isinstance(element, TupleElement):
        return {"type": "tuple", "items": [element_to_dict(item) for item in element.items]}
    if isinstance(element, IndexedArray):
        return {"type": "array", "items": [named_to_dict(item) for item in element.items]}
    raise SerializationError(f"Unsupported Element type: {type(element)}")


def element_from_dict(d: Dict[str, Any]) -> Element:
    if not isinstance(d, dict):
        raise SerializationError(f"Expected element dict, got {type(d).__name__}")
    t = d.get("type")
    try:
        if t == "scalar":
            return ScalarConstant(d["value"])
        if t == "float":
            return FloatConstant(d["value"])
        if t == "set":
            return SetElement([
                element_from_dict(item) if isinstance(item, dict) else item
                for item in d.get("items", [])
            ])
        if t == "tuple":
            return TupleElement([element_from_dict(item) for item in d.get("items", [])])
        if t == "array":
            return IndexedArray([named_from_dict(item) for item in d.get("items", [])])
    except KeyError as exc:
        raise SerializationError(f"Missing key {exc} in {t} element") from exc
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Invalid {t} element: {exc}") from exc
    raise SerializationError(f"Unsupported element dict type: {t}")


def named_to_dict(named: NamedElement) -> Dict[str, Any]:
    return {"name": named.name, "element": element_to_dict(named.element)}


def named_from_dict(d: Dict[str, Any]) -> NamedElement:
    try:
        return NamedElement(name=d["name"], element=element_from_dict(d["element"]))
    except KeyError as exc:
        raise SerializationError(f"Missing key {exc} in named element") from exc


def document_to_dict(doc: Document) -> Dict[str, Any]:
    return {
        "elements": [named_to_dict(named) for named in doc.elements],
        "prefix_text": list(doc.prefix_text),
        "pretty_printing": doc.pretty_printing,
        "config": config_to_dict(doc.config),
    }


def document_from_dict(d: Dict[str, Any]) -> Document:
    doc = Document(
        pretty_printing=d.get("pretty_printing", True),
        config=config_from_dict(d.get("config")),
    )
    doc.set_prefix_text(d.get("prefix_text"))
    doc.elements = [named_from_dict(named) for named in d.get("elements", [])]
    return doc


def document_to_json(doc: Document) -> str:
    return json.dumps(document_to_dict(doc), sort_keys=True)


def document_from_json(s: str) -> Document:
    d = json.loads(s)
    return document_from_dict(d)


def document_to_yaml(doc: Document) -> str:
    return yaml.safe_dump(document_to_dict(doc))


def document_from_yaml(s: str) -> Document:
    d = yaml.safe_load(s)
    return document_from_dict(d)
