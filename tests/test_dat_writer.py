"""
Tests for the OPL data file writer.

These tests verify that documents are correctly converted to `.dat` syntax.
We test exact output because the solver's parser is strict.

Tests cover:
    - Atomic literals (strings, integers, floats)
    - Compact and pretty layouts of sets, tuples and indexed arrays
    - Header comment and statement layout
    - Layout-independence of the token stream
    - File persistence and I/O error reporting
"""

import os
import re
import tempfile
from datetime import datetime, timezone

import pytest
from opldat.backends.dat_writer import (
    generate_dat,
    render_body,
    render_element,
    render_header,
    save_data_file,
    save_temp_data_file,
)
from opldat.config import FormatConfig
from opldat.elements import (
    Element,
    FloatConstant,
    IndexedArray,
    NamedElement,
    ScalarConstant,
    SetElement,
    TupleElement,
)
from opldat.errors import DataFileWriteError
from opldat.examples import build_example_document
from opldat.model import Document

NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

HEADER = (
    "/******************************************************\n"
    " * Auto generated data file\n"
    " * Creation Date: 2026-01-02 03:04:05 UTC\n"
    " ******************************************************/\n"
    "\n"
)


def _strip_whitespace(text: str) -> str:
    return re.sub(r"\s+", "", text)


def _top_level_items(content: str):
    """Split a collection literal into its top-level items by bracket depth."""
    if content.startswith("#["):
        body = content[2:-2]
    else:
        body = content[1:-1]
    items, depth, current = [], 0, ""
    for ch in body:
        if ch in "{<[":
            depth += 1
        elif ch in "}>]":
            depth -= 1
        if ch == "," and depth == 0:
            items.append(current)
            current = ""
        else:
            current += ch
    if current.strip():
        items.append(current)
    return [item.strip() for item in items]


class TestAtomicElements:
    """Atomic elements render the same in both layouts."""

    def test_integer(self):
        assert render_element(ScalarConstant(4)) == "4"
        assert render_element(ScalarConstant(-8), pretty_printing=True) == "-8"

    def test_bool_written_as_integer(self):
        assert render_element(ScalarConstant(True)) == "1"

    def test_string_quoted(self):
        assert render_element(ScalarConstant("test name")) == '"test name"'

    def test_string_escaping(self):
        """Quotes, backslashes and newlines are escaped."""
        rendered = render_element(ScalarConstant('a "b" \\c\nd'))
        assert rendered == '"a \\"b\\" \\\\c\\nd"'

    @pytest.mark.parametrize(
        "value, expected",
        [
            (15.0, "15.0"),
            (0.1, "0.1"),
            (-2.5, "-2.5"),
            (1e-7, "0.0000001"),
            (1e16, "10000000000000000.0"),
            (3, "3.0"),
        ],
    )
    def test_float_fixed_point(self, value, expected):
        assert render_element(FloatConstant(value)) == expected


class TestCompactLayout:

    def test_set_of_identifiers(self):
        """Raw strings in sets are written bare."""
        assert render_element(SetElement(["a_0000", "a_0001"])) == "{a_0000,a_0001}"

    def test_set_of_numbers(self):
        assert render_element(SetElement([1, 2])) == "{1,2}"
        assert render_element(SetElement([1.0, 2.5])) == "{1.0,2.5}"

    def test_empty_collections(self):
        assert render_element(SetElement()) == "{}"
        assert render_element(TupleElement()) == "<>"
        assert render_element(IndexedArray()) == "#[]#"

    def test_tuple(self):
        t = TupleElement([ScalarConstant("x"), FloatConstant(1.5), ScalarConstant(3)])
        assert render_element(t) == '<"x",1.5,3>'

    def test_indexed_array(self):
        arr = IndexedArray([
            NamedElement("a", ScalarConstant(1)),
            NamedElement("b", ScalarConstant(2)),
        ])
        assert render_element(arr) == "#[a: 1,b: 2]#"

    def test_set_of_tuples(self):
        s = SetElement([
            TupleElement([ScalarConstant(1), ScalarConstant(2)]),
            TupleElement([ScalarConstant(3), ScalarConstant(4)]),
        ])
        assert render_element(s) == "{<1,2>,<3,4>}"

    def test_compact_ignores_indentation(self):
        s = SetElement(["a", "b"])
        assert render_element(s, False, 8, 3) == render_element(s)


class TestPrettyLayout:

    def test_set_at_top_level(self):
        rendered = render_element(SetElement(["a", "b"]), True, 4, 1)
        assert rendered == "{\n        a,\n        b\n    }"

    def test_set_at_depth_zero(self):
        rendered = render_element(SetElement(["a", "b"]), True, 4, 0)
        assert rendered == "{\n    a,\n    b\n}"

    def test_indent_width(self):
        rendered = render_element(TupleElement([ScalarConstant(1)]), True, 2, 0)
        assert rendered == "<\n  1\n>"

    def test_nested_children_one_level_deeper(self):
        arr = IndexedArray([
            NamedElement("k", TupleElement([ScalarConstant(1), ScalarConstant(2)])),
        ])
        rendered = render_element(arr, True, 4, 0)
        assert rendered == (
            "#[\n"
            "    k: <\n"
            "        1,\n"
            "        2\n"
            "    >\n"
            "]#"
        )

    def test_empty_collection_stays_on_one_line(self):
        assert render_element(SetElement(), True, 4, 1) == "{}"


class TestLayoutEquivalence:
    """Both layouts carry the same tokens and structure."""

    ELEMENTS = [
        SetElement(["a", "b", "c"]),
        TupleElement([ScalarConstant(1), FloatConstant(2.5), SetElement([1, 2])]),
        IndexedArray([
            NamedElement("k1", TupleElement([ScalarConstant(1), ScalarConstant(2)])),
            NamedElement("k2", TupleElement([ScalarConstant(3), ScalarConstant(4)])),
        ]),
        IndexedArray([
            NamedElement("outer", IndexedArray([NamedElement("inner", SetElement(["x"]))])),
        ]),
    ]

    @pytest.mark.parametrize("element", ELEMENTS)
    def test_only_whitespace_differs(self, element):
        compact = render_element(element, False, 4, 1)
        pretty = render_element(element, True, 4, 1)
        assert compact != pretty
        assert _strip_whitespace(compact) == _strip_whitespace(pretty)

    @pytest.mark.parametrize("element", ELEMENTS)
    def test_item_count_matches_children(self, element):
        for pretty in (False, True):
            rendered = render_element(element, pretty, 4, 1)
            assert len(_top_level_items(rendered)) == len(element.items)

    def test_render_is_repeatable(self):
        element = self.ELEMENTS[2]
        assert render_element(element, True, 4, 1) == render_element(element, True, 4, 1)

    def test_unknown_element_type(self):
        class Custom(Element):
            pass

        with pytest.raises(TypeError):
            render_element(Custom())


class TestDocumentRendering:

    def test_empty_document_is_header_only(self):
        assert generate_dat(Document(), now=NOW) == HEADER

    def test_header_with_prefix_text(self):
        doc = Document()
        doc.set_prefix_text(["scenario A", "run 7"])
        header = render_header(doc, now=NOW)
        assert " * Auto generated data file\n * scenario A\n * run 7\n * Creation Date:" in header

    def test_header_uses_config(self):
        doc = Document(config=FormatConfig(banner_title="Plant data", timestamp_format="%Y%m%d"))
        header = render_header(doc, now=NOW)
        assert " * Plant data\n" in header
        assert " * Creation Date: 20260102\n" in header

    def test_header_defaults_to_current_time(self):
        header = render_header(Document())
        assert f"Creation Date: {datetime.now().year}" in header

    def test_scalar_and_set_compact(self):
        doc = Document(pretty_printing=False)
        doc.add_element("timeHorizon", ScalarConstant(4))
        doc.add_element("ids", SetElement(["a_0000", "a_0001"]))
        dat = generate_dat(doc, now=NOW)
        assert dat == HEADER + "timeHorizon = 4;\n\nids = {a_0000,a_0001};\n\n"

    def test_pretty_statement_layout(self):
        doc = Document()
        doc.add_element("ids", SetElement(["a", "b"]))
        assert render_body(doc) == "ids = {\n        a,\n        b\n    };\n\n"

    def test_pretty_override(self):
        doc = Document(pretty_printing=True)
        doc.add_element("ids", SetElement(["a", "b"]))
        assert render_body(doc, pretty_printing=False) == "ids = {a,b};\n\n"

    def test_statement_order_is_insertion_order(self):
        doc = Document(pretty_printing=False)
        for name in ["zeta", "alpha", "mid"]:
            doc.add_element(name, ScalarConstant(0))
        names = [line.split(" = ")[0] for line in render_body(doc).split("\n") if line]
        assert names == ["zeta", "alpha", "mid"]

    def test_document_config_indentation(self):
        doc = Document(config=FormatConfig(indent_width=2, indent_level=0))
        doc.add_element("t", TupleElement([ScalarConstant(1)]))
        assert render_body(doc) == "t = <\n  1\n>;\n\n"

    def test_idempotent(self):
        doc = build_example_document()
        assert generate_dat(doc, now=NOW) == generate_dat(doc, now=NOW)

    def test_render_does_not_mutate(self):
        doc = build_example_document()
        before = list(doc.elements)
        generate_dat(doc, now=NOW)
        assert doc.elements == before

    def test_example_document_layouts_equivalent(self):
        doc = build_example_document()
        compact = generate_dat(doc, pretty_printing=False, now=NOW)
        pretty = generate_dat(doc, pretty_printing=True, now=NOW)
        body_compact = compact[len(render_header(doc, NOW)):]
        body_pretty = pretty[len(render_header(doc, NOW)):]
        assert _strip_whitespace(body_compact) == _strip_whitespace(body_pretty)


class TestPersistence:

    def _doc(self):
        doc = Document(pretty_printing=False)
        doc.add_element("n", ScalarConstant(3))
        return doc

    def test_save_data_file(self, tmp_path):
        path = tmp_path / "model.dat"
        save_data_file(self._doc(), str(path))
        content = path.read_text(encoding="utf-8")
        assert content.startswith("/***")
        assert content.endswith("n = 3;\n\n")

    def test_save_overwrites(self, tmp_path):
        path = tmp_path / "model.dat"
        path.write_text("old contents")
        save_data_file(self._doc(), str(path))
        assert "old contents" not in path.read_text(encoding="utf-8")

    def test_save_failure_raises_write_error(self, tmp_path):
        path = tmp_path / "missing" / "model.dat"
        with pytest.raises(DataFileWriteError) as excinfo:
            save_data_file(self._doc(), str(path))
        assert isinstance(excinfo.value, OSError)
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_save_temp_data_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
        path = save_temp_data_file(self._doc())
        assert os.path.isabs(path)
        name = os.path.basename(path)
        assert name.startswith("networkstructure-data-")
        assert name.endswith(".dat")
        with open(path, encoding="utf-8") as fh:
            assert fh.read().endswith("n = 3;\n\n")

    def test_save_temp_data_file_custom_prefix(self, tmp_path, monkeypatch):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
        path = save_temp_data_file(self._doc(), prefix="plant-")
        assert os.path.basename(path).startswith("plant-")

    def test_temp_dir_failure_raises_write_error(self, tmp_path, monkeypatch):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "missing"))
        with pytest.raises(DataFileWriteError):
            save_temp_data_file(self._doc())
