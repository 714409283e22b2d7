"""
Document Analyzer: opt-in diagnostics for opldat documents.

Rendering never checks caller obligations; a bad name or a ragged tuple
array simply produces a broken data file. This module finds such
problems before the file reaches the solver:
    - Invalid or duplicate identifiers
    - Duplicate keys inside indexed arrays
    - Tuple arrays with inconsistent arity
    - Arrays mixing element kinds
    - Prefix text that would close the header comment

IMPORTANT: The analyzer is read-only. It never modifies the document.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Set

from opldat.elements import (
    Element,
    IndexedArray,
    SetElement,
    TupleElement,
)
from opldat.model import Document

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_valid_identifier(name: str) -> bool:
    """Whether name can be used as an OPL identifier or array key."""
    return isinstance(name, str) and bool(IDENTIFIER_RE.match(name))


@dataclass
class ElementMetrics:
    """Metrics about a single element tree."""
    depth: int = 0
    node_count: int = 0

    def add(self, other: ElementMetrics) -> None:
        self.depth = max(self.depth, other.depth)
        self.node_count += other.node_count


@dataclass
class DocumentReport:
    """Analysis report for a document."""

    total_elements: int = 0
    element_kinds: Dict[str, int] = field(default_factory=dict)

    # Tree shape
    max_depth: int = 0
    total_nodes: int = 0

    # Caller obligations
    invalid_identifiers: List[str] = field(default_factory=list)
    duplicate_names: Set[str] = field(default_factory=set)
    duplicate_array_keys: Dict[str, Set[str]] = field(default_factory=dict)
    inconsistent_tuple_arrays: Set[str] = field(default_factory=set)
    mixed_kind_arrays: Set[str] = field(default_factory=set)
    unsafe_prefix_lines: List[int] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_clean(self) -> bool:
        return not self.warnings


def _check_array(path: str, array: IndexedArray, report: DocumentReport) -> None:
    keys = Counter(item.name for item in array.items)
    duplicates = {key for key, count in keys.items() if count > 1}
    if duplicates:
        report.duplicate_array_keys[path] = duplicates

    for item in array.items:
        if not is_valid_identifier(item.name):
            report.invalid_identifiers.append(f"{path}[{item.name}]")

    kinds = {type(item.element) for item in array.items}
    if len(kinds) > 1:
        report.mixed_kind_arrays.add(path)
    elif kinds == {TupleElement}:
        arities = {len(item.element) for item in array.items}
        if len(arities) > 1:
            report.inconsistent_tuple_arrays.add(path)


def _analyze_element(path: str, element: Element, report: DocumentReport) -> ElementMetrics:
    """Recursively analyze an element tree, recording array problems in report."""
    metrics = ElementMetrics(depth=1, node_count=1)

    children: List[tuple] = []
    if isinstance(element, IndexedArray):
        _check_array(path, element, report)
        children = [(f"{path}[{item.name}]", item.element) for item in element.items]
    elif isinstance(element, TupleElement):
        children = [(f"{path}<{i}>", item) for i, item in enumerate(element.items)]
    elif isinstance(element, SetElement):
        children = [
            (f"{path}{{{i}}}", item)
            for i, item in enumerate(element.items)
            if isinstance(item, Element)
        ]

    child_metrics = ElementMetrics()
    for child_path, child in children:
        child_metrics.add(_analyze_element(child_path, child, report))
    if isinstance(element, SetElement):
        # raw values count as leaves
        child_metrics.node_count += len(element.items) - len(children)
        if len(element.items) > len(children):
            child_metrics.depth = max(child_metrics.depth, 1)

    metrics.depth += child_metrics.depth
    metrics.node_count += child_metrics.node_count
    return metrics


def analyze_document(document: Document) -> DocumentReport:
    """
    Check a document against the obligations rendering does not enforce.

    Returns a DocumentReport with metrics and warnings.
    """
    report = DocumentReport(total_elements=len(document.elements))

    kinds: Counter = Counter(type(named.element).__name__ for named in document.elements)
    report.element_kinds = dict(kinds)

    # =========================================================================
    # 1. TOP-LEVEL NAMES
    # =========================================================================

    names = Counter(named.name for named in document.elements)
    report.duplicate_names = {name for name, count in names.items() if count > 1}

    for named in document.elements:
        if not is_valid_identifier(named.name):
            report.invalid_identifiers.append(named.name)

    # =========================================================================
    # 2. ELEMENT TREES
    # =========================================================================

    for named in document.elements:
        metrics = _analyze_element(named.name, named.element, report)
        report.max_depth = max(report.max_depth, metrics.depth)
        report.total_nodes += metrics.node_count

    # =========================================================================
    # 3. HEADER
    # =========================================================================

    for index, line in enumerate(document.prefix_text):
        if "*/" in line:
            report.unsafe_prefix_lines.append(index)

    # =========================================================================
    # 4. WARNING FLAGS
    # =========================================================================

    if report.invalid_identifiers:
        report.add_warning(
            f"Invalid identifiers: {', '.join(report.invalid_identifiers)}"
        )

    if report.duplicate_names:
        report.add_warning(
            f"Duplicate element names: {', '.join(sorted(report.duplicate_names))}"
        )

    for path, keys in sorted(report.duplicate_array_keys.items()):
        report.add_warning(f"Duplicate keys in {path}: {', '.join(sorted(keys))}")

    if report.inconsistent_tuple_arrays:
        report.add_warning(
            f"Tuple arrays with inconsistent arity: {', '.join(sorted(report.inconsistent_tuple_arrays))}"
        )

    if report.mixed_kind_arrays:
        report.add_warning(
            f"Arrays mixing element kinds: {', '.join(sorted(report.mixed_kind_arrays))}"
        )

    if report.unsafe_prefix_lines:
        report.add_warning(
            f"Prefix text lines close the header comment: {', '.join(str(i) for i in report.unsafe_prefix_lines)}"
        )

    return report
