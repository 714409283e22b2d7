"""
OPL data file writer for opldat documents.

Converts a Document into the `.dat` syntax read by CPLEX OPL models.

Output layout:

    /******************************************************
     * Auto generated data file
     * <prefix text lines>
     * Creation Date: <timestamp>
     ******************************************************/

    name1 = content1;

    name2 = content2;

Supports two layouts from the same elements:
    - compact: every element on one line
    - pretty: composite elements spread over indented lines
"""

import logging
import os
import tempfile
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from opldat.elements import (
    Element,
    FloatConstant,
    IndexedArray,
    ScalarConstant,
    SetElement,
    TupleElement,
)
from opldat.errors import DataFileWriteError
from opldat.model import Document

logger = logging.getLogger(__name__)

BANNER_OPEN = "/" + "*" * 54
BANNER_CLOSE = " " + "*" * 54 + "/"


def _escape_dat_string(s: str) -> str:
    """Quote a string literal, escaping backslashes, quotes and newlines."""
    s = s.replace("\\", "\\\\")
    s = s.replace('"', '\\"')
    s = s.replace("\n", "\\n")
    return f'"{s}"'


def _format_float(value: float) -> str:
    """Shortest round-tripping fixed-point literal, never exponent notation."""
    text = format(Decimal(repr(float(value))), "f")
    if "." not in text:
        text += ".0"
    return text


def _format_int(value: int) -> str:
    # bool is an int subclass; OPL has no boolean literal
    return str(int(value))


def _render_set_item(item, pretty_printing: bool, indent_width: int, indent_level: int) -> str:
    if isinstance(item, Element):
        return render_element(item, pretty_printing, indent_width, indent_level)
    if isinstance(item, str):
        return item
    if isinstance(item, float):
        return _format_float(item)
    return _format_int(item)


def _join_items(opening: str, closing: str, parts: List[str], pretty_printing: bool,
                indent_width: int, indent_level: int) -> str:
    """Wrap rendered children in brackets, one per line when pretty printing."""
    if not parts:
        return opening + closing
    if not pretty_printing:
        return opening + ",".join(parts) + closing

    inner = " " * (indent_width * (indent_level + 1))
    outer = " " * (indent_width * indent_level)
    body = ",\n".join(inner + part for part in parts)
    return f"{opening}\n{body}\n{outer}{closing}"


def render_element(element: Element, pretty_printing: bool = False,
                   indent_width: int = 4, indent_level: int = 0) -> str:
    """
    Render the content of one element (the right-hand side of `name = ...`).

    Args:
        element: Element to render
        pretty_printing: Spread composite elements over indented lines
        indent_width: Spaces per nesting level
        indent_level: Nesting depth of the caller; children are indented
            one level deeper

    Returns:
        Element content without name or trailing semicolon

    Raises:
        TypeError: If element is not one of the known element kinds
    """
    child_level = indent_level + 1

    if isinstance(element, ScalarConstant):
        if isinstance(element.value, str):
            return _escape_dat_string(element.value)
        return _format_int(element.value)

    elif isinstance(element, FloatConstant):
        return _format_float(element.value)

    elif isinstance(element, SetElement):
        parts = [
            _render_set_item(item, pretty_printing, indent_width, child_level)
            for item in element.items
        ]
        return _join_items("{", "}", parts, pretty_printing, indent_width, indent_level)

    elif isinstance(element, TupleElement):
        parts = [
            render_element(item, pretty_printing, indent_width, child_level)
            for item in element.items
        ]
        return _join_items("<", ">", parts, pretty_printing, indent_width, indent_level)

    elif isinstance(element, IndexedArray):
        parts = [
            f"{item.name}: {render_element(item.element, pretty_printing, indent_width, child_level)}"
            for item in element.items
        ]
        return _join_items("#[", "]#", parts, pretty_printing, indent_width, indent_level)

    raise TypeError(f"Unsupported Element type: {type(element)}")


def format_timestamp(document: Document, now: Optional[datetime] = None) -> str:
    """Format the creation date with the document's timestamp pattern."""
    if now is None:
        now = datetime.now().astimezone()
    return now.strftime(document.config.timestamp_format)


def render_header(document: Document, now: Optional[datetime] = None) -> str:
    """
    Build the header comment block, followed by one blank line.

    Prefix text lines are copied verbatim; a line containing `*/` ends
    the comment early and breaks the file.
    """
    lines = [BANNER_OPEN, f" * {document.config.banner_title}"]
    for line in document.prefix_text:
        lines.append(f" * {line}")
    lines.append(f" * Creation Date: {format_timestamp(document, now)}")
    lines.append(BANNER_CLOSE)
    return "\n".join(lines) + "\n\n"


def render_body(document: Document, pretty_printing: Optional[bool] = None) -> str:
    """Render every top-level element as `name = content;` plus a blank line."""
    if pretty_printing is None:
        pretty_printing = document.pretty_printing
    config = document.config

    statements = []
    for named in document.elements:
        content = render_element(
            named.element,
            pretty_printing,
            config.indent_width,
            config.indent_level,
        )
        statements.append(f"{named.name} = {content};\n\n")
    return "".join(statements)


def generate_dat(document: Document, pretty_printing: Optional[bool] = None,
                 now: Optional[datetime] = None) -> str:
    """
    Generate the complete data file for a document.

    Args:
        document: Document to render
        pretty_printing: Overrides document.pretty_printing when given
        now: Creation time for the header; defaults to the current local time

    Returns:
        String containing the data file
    """
    logger.debug(
        "Rendering document with %d elements (pretty_printing=%s)",
        len(document.elements),
        document.pretty_printing if pretty_printing is None else pretty_printing,
    )
    return render_header(document, now) + render_body(document, pretty_printing)


def save_data_file(document: Document, filename: str, pretty_printing: Optional[bool] = None) -> None:
    """
    Generate the data file and save it, overwriting any existing file.

    Raises:
        DataFileWriteError: If the file cannot be written
    """
    dat = generate_dat(document, pretty_printing=pretty_printing)
    try:
        with open(filename, "w", encoding="utf-8") as f:
            f.write(dat)
    except OSError as exc:
        raise DataFileWriteError(f"Could not write data file {filename}: {exc}") from exc
    logger.info("Wrote data file %s", filename)


def save_temp_data_file(document: Document, prefix: Optional[str] = None,
                        pretty_printing: Optional[bool] = None) -> str:
    """
    Generate the data file and save it to a new temporary file.

    Args:
        document: Document to render
        prefix: Temporary file name prefix; defaults to config.temp_prefix
        pretty_printing: Overrides document.pretty_printing when given

    Returns:
        Absolute path of the written file

    Raises:
        DataFileWriteError: If the file cannot be created or written
    """
    config = document.config
    if prefix is None:
        prefix = config.temp_prefix
    dat = generate_dat(document, pretty_printing=pretty_printing)
    try:
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=config.temp_suffix)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dat)
    except OSError as exc:
        raise DataFileWriteError(f"Could not write temporary data file: {exc}") from exc
    path = os.path.abspath(path)
    logger.info("Wrote temporary data file %s", path)
    return path


__all__ = [
    "render_element",
    "render_header",
    "render_body",
    "generate_dat",
    "format_timestamp",
    "save_data_file",
    "save_temp_data_file",
]
