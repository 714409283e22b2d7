"""
Example document builder.

Builds a small production planning data file: a few constants, the set of
generated item IDs and a tuple array with the cost data of every item.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from opldat.builders import build_tuple_array
from opldat.elements import Element, FloatConstant, ScalarConstant, SetElement
from opldat.identifiers import enumerate_item_ids
from opldat.model import Document

RECYCLE_COST_FACTOR = 0.25


@dataclass(frozen=True)
class DataItem:
    """A product with its cost figures."""

    label: str
    production_cost: float
    transport_cost: float


def map_item_costs(item: DataItem) -> List[Element]:
    return [
        FloatConstant(item.production_cost),
        FloatConstant(item.production_cost * RECYCLE_COST_FACTOR),
        FloatConstant(item.transport_cost),
    ]


def example_items() -> List[DataItem]:
    return [
        DataItem("bolt", 1.5, 0.25),
        DataItem("nut", 0.75, 0.125),
        DataItem("washer", 0.5, 0.125),
    ]


def build_example_document(items: Optional[Sequence[DataItem]] = None, pretty_printing: bool = True) -> Document:
    if items is None:
        items = example_items()

    doc = Document(pretty_printing=pretty_printing)
    doc.set_prefix_text("Example production planning data")

    doc.add_element("dataTitle", ScalarConstant("test name"))
    doc.add_element("timeHorizon", ScalarConstant(4))
    doc.add_element("stepLength", FloatConstant(15.0))

    item_ids = enumerate_item_ids(items, "di", doc.config.id_padding)
    doc.add_element("dataItemIDs", SetElement(item_ids.values()))
    doc.add(build_tuple_array("myData", item_ids, map_item_costs))

    return doc
