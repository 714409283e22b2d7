"""
Document Model

The Document is the root container of one OPL data file:

    - an ordered list of top-level NamedElements (file line order)
    - optional prefix text spliced into the header comment
    - the pretty-printing flag applied to every element
    - the FormatConfig used for layout

ARCHITECTURAL RULE:
    The Document knows nothing about output syntax.
    opldat.backends.dat_writer renders it.

A Document is built by appending elements, then rendered. Rendering does
not modify it and may be repeated.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from opldat.config import FormatConfig
from opldat.elements import Element, NamedElement


@dataclass
class Document:
    """
    Root container for one data file.

    Properties:
        elements:
            Top-level entries, written in insertion order as
            `name = content;`

        prefix_text:
            Extra header comment lines, one string per line.
            Lines must not contain `*/`, which would close the header
            comment early.

        pretty_printing:
            Whether composite elements are laid out over several
            indented lines

        config:
            Layout constants for this document

    INVARIANTS (caller obligations, not enforced):
        - Every element name is a valid OPL identifier
        - Element names are unique within the document
    """

    elements: List[NamedElement] = field(default_factory=list)
    prefix_text: List[str] = field(default_factory=list)
    pretty_printing: bool = True
    config: FormatConfig = field(default_factory=FormatConfig)

    def add(self, named: NamedElement) -> NamedElement:
        """
        Append an already named element.

        Args:
            named: NamedElement, e.g. the result of a composite builder

        Returns:
            The same NamedElement
        """
        if not isinstance(named, NamedElement):
            raise TypeError(f"Expected NamedElement, got {type(named).__name__}")
        self.elements.append(named)
        return named

    def add_element(self, name: str, element: Element) -> NamedElement:
        """
        Name an element and append it.

        Args:
            name: Identifier written on the left of `=`
            element: Element whose content is written on the right

        Returns:
            The NamedElement that was appended
        """
        return self.add(NamedElement(name, element))

    def set_prefix_text(self, text: Union[str, Sequence[str], None]) -> None:
        """
        Replace the header prefix text.

        A single string becomes one header line, a sequence gives one line
        per item, None removes the prefix text.
        """
        if text is None:
            self.prefix_text = []
        elif isinstance(text, str):
            self.prefix_text = [text]
        else:
            self.prefix_text = list(text)

    def get_element(self, name: str) -> Optional[NamedElement]:
        """
        Retrieve a top-level element by name.

        Returns:
            The first NamedElement with that name, or None if not found
        """
        for named in self.elements:
            if named.name == name:
                return named
        return None

    def __len__(self) -> int:
        return len(self.elements)
