#!/usr/bin/env python3
"""
Demo: Generate an OPL data file from the example document.

Shows both layouts (compact and pretty-printed) and writes a temporary file.
"""

import logging

from opldat.analyzer import analyze_document
from opldat.backends import generate_dat, save_temp_data_file
from opldat.examples import build_example_document


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    doc = build_example_document()

    print("=" * 80)
    print("DATA WRITER DEMO")
    print("=" * 80)

    for pretty in (False, True):
        print(f"\n{'PRETTY' if pretty else 'COMPACT'} LAYOUT:")
        print("-" * 80)
        print(generate_dat(doc, pretty_printing=pretty))

    report = analyze_document(doc)
    print(f"Elements: {report.total_elements}, nodes: {report.total_nodes}, max depth: {report.max_depth}")
    for warning in report.warnings:
        print(f"WARNING: {warning}")

    path = save_temp_data_file(doc)
    print(f"\nSaved to: {path}")
    print("=" * 80)


if __name__ == "__main__":
    main()
