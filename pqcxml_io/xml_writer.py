"""PQC XML rendering utilities."""

# Module responsibilities:
# - Render structural page lists and descriptive element maps with lxml.
# - Keep attribute and element order identical to the order of the inputs.

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from lxml import etree

from .utils.log import get_logger

logger = get_logger("xml_writer")

DEFAULT_IDENTIFIER_ELEMENT = "ark"


class PageLike(Protocol):
    """Attributes read from each page when rendering structural XML."""

    number: int
    sequence: int
    default_scale: int
    side: str
    image_id: str
    visible_page: Optional[str]
    display: bool
    toc: Sequence[str]
    ill: Sequence[str]


def _to_text(root: etree._Element) -> str:
    return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8").decode("utf-8")


def render_structural_xml(identifier: Optional[str], pages: Iterable[PageLike]) -> str:
    """Render the ``<record>`` structural document for a package."""

    root = etree.Element("record")
    ark = etree.SubElement(root, "ark")
    ark.text = identifier or ""
    pages_el = etree.SubElement(root, "pages")

    count = 0
    for page in pages:
        page_el = etree.SubElement(pages_el, "page")
        page_el.set("number", str(page.number))
        page_el.set("seq", str(page.sequence))
        page_el.set("image.defaultscale", str(page.default_scale))
        page_el.set("side", page.side)
        page_el.set("id", page.image_id)
        page_el.set("image.id", page.image_id)
        page_el.set("visiblepage", page.visible_page or "")
        page_el.set("display", "true" if page.display else "false")
        for entry in page.toc:
            toc_el = etree.SubElement(page_el, "tocentry", name="toc")
            toc_el.text = entry
        for entry in page.ill:
            ill_el = etree.SubElement(page_el, "tocentry", name="ill")
            ill_el.text = entry
        count += 1

    logger.info("Rendered structural XML", extra={"pages": count})
    return _to_text(root)


def render_descriptive_xml(
    element_maps: Iterable[Mapping[str, Sequence[str]]],
    identifier_element: str = DEFAULT_IDENTIFIER_ELEMENT,
) -> str:
    """Render the ``<records>`` descriptive document, one ``<record>`` per map.

    The first value of *identifier_element* becomes the record's ``<ark>``; the
    element itself is not repeated inside ``<pqc_elements>``.
    """

    root = etree.Element("records")
    count = 0
    for element_map in element_maps:
        record_el = etree.SubElement(root, "record")
        ark = etree.SubElement(record_el, "ark")
        identifiers = element_map.get(identifier_element) or []
        ark.text = identifiers[0] if identifiers else ""
        elements_el = etree.SubElement(record_el, "pqc_elements")
        for name, values in element_map.items():
            if name == identifier_element:
                continue
            element_el = etree.SubElement(elements_el, "pqc_element", name=name)
            for value in values:
                value_el = etree.SubElement(element_el, "value")
                value_el.text = value
        count += 1

    logger.info("Rendered descriptive XML", extra={"records": count})
    return _to_text(root)
