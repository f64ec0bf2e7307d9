"""
extraction/dom.py - Document Access Helpers
============================================================================
Thin layer over BeautifulSoup giving the table parsers everything they need
from a document: selection, child enumeration, text, decoration removal.

Author: tabletext
Version: 1.0.0
============================================================================
"""

import copy
import logging
from typing import Any, List, Optional, Union

from bs4 import BeautifulSoup, Tag, NavigableString
from bs4.element import PageElement

from tabletext.config.settings import get_settings

logger = logging.getLogger(__name__)

Markup = Union[str, bytes, Tag]


def parse_html(markup: Union[str, bytes], parser: Optional[str] = None) -> BeautifulSoup:
    """Parse markup with the configured tree builder."""
    return BeautifulSoup(markup, parser or get_settings().parser)


def as_document(html: Optional[Markup]) -> Optional[Tag]:
    """Accept parsed elements as-is and parse raw markup."""
    if html is None:
        return None
    if isinstance(html, (str, bytes)):
        return parse_html(html)
    return html


def is_text_node(node: Any) -> bool:
    """True for bare strings (text, comments, CDATA) in the tree."""
    return isinstance(node, NavigableString)


def select_all(document: Tag, selector: str) -> List[Tag]:
    """
    Select elements in document order.

    Raises whatever the selector engine raises (e.g. soupsieve's
    SelectorSyntaxError); callers decide whether to soft fail.
    """
    return list(document.select(selector))


def select_first(element: Optional[Tag], selector: str) -> Optional[Tag]:
    """First element under ``element`` matching ``selector``, if any."""
    if element is None or is_text_node(element):
        return None
    return element.select_one(selector)


def child_elements(element: Optional[PageElement], ignore_text_nodes: bool = True) -> List[PageElement]:
    """
    Direct children of an element in document order.

    With ``ignore_text_nodes`` the bare strings between tags (usually
    indentation) are left out, so indices line up with the cells.
    """
    if element is None or is_text_node(element):
        return []
    return [
        child for child in element.children
        if not (ignore_text_nodes and is_text_node(child))
    ]


def element_text(element: Optional[PageElement]) -> Optional[str]:
    if element is None:
        return None
    if is_text_node(element):
        return str(element)
    return element.get_text()


def strip_decorations(element: Optional[PageElement], selector: Optional[str] = None) -> Optional[PageElement]:
    """
    Return a detached copy of ``element`` without decorative descendants.

    Icon markup like ``<i class="fa fa-info"></i>`` would otherwise leak
    into labels. The caller's tree is left untouched.
    """
    if element is None or is_text_node(element):
        return element

    selector = selector or get_settings().decoration_selector
    working = copy.copy(element)
    for node in working.select(selector):
        node.extract()
    return working
