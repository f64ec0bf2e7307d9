"""
extraction/table_parser.py - Table Parsing Engine
============================================================================
Turns table-like markup into keyed records.

Header cells are translated into caller-defined keys through a label
dictionary, producing a key -> column index map. Content rows are then
projected through that map, one record per row, with optional per-column
parsers and a row filter.

Table Shapes:
1. Horizontal - header row on top, one record per content row
2. Vertical - label cell and value cell per row, one record overall

Design Principles:
- Selection failures soft fail to None, never raise
- None elements are normal input, not errors
- Caller callbacks are not guarded; their errors reach the caller
- Nothing is shared between calls

Author: tabletext
Version: 1.0.0
============================================================================
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from soupsieve import SelectorSyntaxError

from tabletext.config.settings import (
    TableOptions,
    VerticalTableOptions,
    get_settings,
)
from tabletext.core.normalizer import TextNormalizer, get_normalizer
from tabletext.core.types import (
    ColumnParser,
    HeaderMap,
    LabelMatcher,
    Record,
    RowFilter,
    TableResult,
    compile_dictionary,
)
from tabletext.extraction.dom import (
    Markup,
    as_document,
    child_elements,
    element_text,
    select_all,
    select_first,
    strip_decorations,
)

# Configure logging
logger = logging.getLogger(__name__)

# What a broken selector or a bogus container raises
SELECTION_ERRORS = (SelectorSyntaxError, AttributeError, TypeError, ValueError)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _ignore_text_nodes(flag: Optional[bool]) -> bool:
    return get_settings().ignore_text_nodes if flag is None else flag


def _safe_select(document: Any, selector: Any, what: str) -> Optional[List[Any]]:
    """Select rows, turning selection failures into None."""
    if document is None:
        logger.warning("No document to select %s rows from", what)
        return None
    try:
        return select_all(document, selector)
    except SELECTION_ERRORS as e:
        logger.warning("Could not select %s rows with %r: %s", what, selector, e)
        return None


def _safe_select_first(element: Any, selector: Any, what: str) -> Tuple[bool, Any]:
    """Select one sub-element; first item tells whether selection worked."""
    try:
        return True, select_first(element, selector)
    except SELECTION_ERRORS as e:
        logger.warning("Could not select %s cell with %r: %s", what, selector, e)
        return False, None


def _cell_at(children: List[Any], index: int) -> Any:
    if 0 <= index < len(children):
        return children[index]
    return None


def _merge_options(base: Any, **overrides: Any) -> Any:
    """Apply explicit (non-None) keyword arguments over an options bundle."""
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def default_parser(
    element: Any,
    record: Record,
    key: Any,
    normalizer: Optional[TextNormalizer] = None,
) -> None:
    """
    Default cell parser: drop decorations, normalize text, store under key.

    A None element leaves the record untouched.
    """
    if element is None:
        return
    normalizer = normalizer or get_normalizer()
    record[key] = normalizer.normalize(element_text(strip_decorations(element)))


def _apply_parser(
    parsers: Mapping[Any, ColumnParser],
    element: Any,
    record: Record,
    key: Any,
    normalizer: TextNormalizer,
) -> None:
    parser = parsers.get(key)
    if parser is None:
        default_parser(element, record, key, normalizer)
    else:
        parser(element, record, key)


# ============================================================================
# LABEL TRANSLATION
# ============================================================================

class LabelTranslator:
    """
    Translate header cell labels into keys.

    Dictionary entries are tried in order; the first one whose matcher
    accepts the cleaned label wins.

    Usage:
        translator = LabelTranslator({'id': re.compile(r'number'), 'name': 'my text'})
        translator.translate(th)  # 'id'
    """

    def __init__(
        self,
        dictionary: Mapping[Any, Any],
        normalizer: Optional[TextNormalizer] = None,
    ):
        self.matchers: Dict[Any, LabelMatcher] = compile_dictionary(dictionary)
        self.normalizer = normalizer or get_normalizer()

    def label_of(self, element: Any) -> Optional[str]:
        """Cleaned label text of an element."""
        if element is None:
            return None
        return self.normalizer.normalize(element_text(strip_decorations(element)))

    def translate_label(self, label: Optional[str]) -> Optional[Any]:
        """Key for a cleaned label; a blank label never matches."""
        if not label:
            return None
        for key, matcher in self.matchers.items():
            if matcher.matches(label):
                return key
        return None

    def translate(self, element: Any) -> Optional[Any]:
        """Key for an element's label, or None when nothing matches."""
        if element is None:
            return None
        return self.translate_label(self.label_of(element))


# ============================================================================
# HEADER MAPPING
# ============================================================================

class HeaderMapper:
    """
    Build a key -> column index map from header rows.

    When several rows are selected outside first-row-header mode, each row
    is mapped in turn and only the last map is kept.
    """

    def __init__(
        self,
        translator: LabelTranslator,
        first_row_header: bool = False,
        ignore_text_nodes: Optional[bool] = None,
    ):
        self.translator = translator
        self.first_row_header = first_row_header
        self.ignore_text_nodes = _ignore_text_nodes(ignore_text_nodes)

    def map_row(self, row: Any) -> HeaderMap:
        header_map: HeaderMap = {}
        for index, cell in enumerate(child_elements(row, self.ignore_text_nodes)):
            key = self.translator.translate(cell)
            if key is None:
                continue
            header_map[key] = index
        return header_map

    def build(self, html: Optional[Markup], selector: str) -> Optional[HeaderMap]:
        """
        Map header labels to column indexes.

        Returns:
            The header map, or None when selection failed or matched nothing
        """
        rows = _safe_select(as_document(html), selector, 'header')
        if rows is None:
            return None
        if self.first_row_header:
            rows = rows[:1]

        header_map: Optional[HeaderMap] = None
        for row in rows:
            header_map = self.map_row(row)

        logger.debug("Header map from %r (%d rows): %s", selector, len(rows), header_map)
        return header_map


# ============================================================================
# CONTENT EXTRACTION
# ============================================================================

class ContentExtractor:
    """
    Project content rows through a header map into records.

    Each mapped column is read with its custom parser when one is
    registered, else with ``default_parser``. Custom parsers receive
    ``(element_or_None, record, key)`` and may write any key.
    """

    def __init__(
        self,
        header_map: HeaderMap,
        column_parsers: Optional[Mapping[Any, ColumnParser]] = None,
        first_row_header: bool = False,
        ignore_text_nodes: Optional[bool] = None,
        row_filter: Optional[RowFilter] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        self.header_map = header_map
        self.column_parsers = column_parsers or {}
        self.first_row_header = first_row_header
        self.ignore_text_nodes = _ignore_text_nodes(ignore_text_nodes)
        self.row_filter = row_filter
        self.normalizer = normalizer or get_normalizer()

    def parse_row(self, row: Any) -> Tuple[Record, List[Any]]:
        """Build the record of one row; also returns the row's cells."""
        cells = child_elements(row, self.ignore_text_nodes)
        record: Record = {}
        for key, index in self.header_map.items():
            _apply_parser(
                self.column_parsers, _cell_at(cells, index), record, key, self.normalizer
            )
        return record, cells

    def extract(self, html: Optional[Markup], selector: str) -> Optional[List[Record]]:
        """
        Parse every content row matching ``selector``.

        Returns:
            Records of the rows accepted by the filter, or None when the
            row selection itself failed
        """
        rows = _safe_select(as_document(html), selector, 'content')
        if rows is None:
            return None

        data: List[Record] = []
        skip_header = self.first_row_header
        for row in rows:
            if skip_header:
                skip_header = False
                continue

            record, cells = self.parse_row(row)
            if self.row_filter is not None and not self.row_filter(record, cells, self.header_map):
                continue
            data.append(record)

        logger.debug("Extracted %d of %d rows from %r", len(data), len(rows), selector)
        return data


# ============================================================================
# TABLE ORCHESTRATION
# ============================================================================

class TableParser:
    """
    Main table parsing orchestrator.

    Usage:
        parser = TableParser()
        result = parser.parse_table(
            html,
            header_selector='thead tr',
            content_selector='tbody tr',
            dictionary={'id': re.compile(r'number'), 'name': 'my text'},
        )
        result.header_map  # {'id': 0, 'name': 1}
        result.data        # [{'id': '111', 'name': 'aaa'}, ...]
    """

    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        self.normalizer = normalizer or get_normalizer()

    def translator(self, dictionary: Mapping[Any, Any]) -> LabelTranslator:
        return LabelTranslator(dictionary, self.normalizer)

    def build_header_map(
        self,
        html: Optional[Markup],
        selector: str,
        dictionary: Mapping[Any, Any],
        first_row_header: bool = False,
        ignore_text_nodes: Optional[bool] = None,
    ) -> Optional[HeaderMap]:
        mapper = HeaderMapper(self.translator(dictionary), first_row_header, ignore_text_nodes)
        return mapper.build(html, selector)

    def extract_rows(
        self,
        html: Optional[Markup],
        selector: str,
        header_map: HeaderMap,
        column_parsers: Optional[Mapping[Any, ColumnParser]] = None,
        first_row_header: bool = False,
        ignore_text_nodes: Optional[bool] = None,
        row_filter: Optional[RowFilter] = None,
    ) -> Optional[List[Record]]:
        extractor = ContentExtractor(
            header_map,
            column_parsers,
            first_row_header,
            ignore_text_nodes,
            row_filter,
            self.normalizer,
        )
        return extractor.extract(html, selector)

    def parse_table(
        self,
        html: Optional[Markup],
        header_selector: Optional[str] = None,
        content_selector: Optional[str] = None,
        dictionary: Optional[Mapping[Any, Any]] = None,
        column_parsers: Optional[Mapping[Any, ColumnParser]] = None,
        first_row_header: Optional[bool] = None,
        ignore_text_nodes: Optional[bool] = None,
        row_filter: Optional[RowFilter] = None,
        options: Optional[TableOptions] = None,
    ) -> Optional[TableResult]:
        """
        Parse a horizontal table.

        Keyword arguments override the matching fields of ``options``.

        Returns:
            TableResult with the header map and row records, or None when
            there is no document or no header map could be built
        """
        opts = _merge_options(
            options or TableOptions(),
            header_selector=header_selector,
            content_selector=content_selector,
            dictionary=dictionary,
            column_parsers=column_parsers,
            first_row_header=first_row_header,
            ignore_text_nodes=ignore_text_nodes,
        )
        if html is None:
            return None

        # Parse once so header and content share the same tree
        document = as_document(html)
        header_map = self.build_header_map(
            document,
            opts.header_selector,
            opts.dictionary,
            opts.first_row_header,
            opts.ignore_text_nodes,
        )
        if header_map is None:
            return None

        data = self.extract_rows(
            document,
            opts.content_selector,
            header_map,
            opts.column_parsers,
            opts.first_row_header,
            opts.ignore_text_nodes,
            row_filter,
        )
        return TableResult(header_map=header_map, data=data)

    def parse_vertical_table(
        self,
        html: Optional[Markup],
        row_selector: Optional[str] = None,
        header_selector: Optional[str] = None,
        content_selector: Optional[str] = None,
        dictionary: Optional[Mapping[Any, Any]] = None,
        column_parsers: Optional[Mapping[Any, ColumnParser]] = None,
        options: Optional[VerticalTableOptions] = None,
    ) -> Optional[Record]:
        """
        Parse a vertical table into a single record.

        Each row contributes one key (its header cell's label) and one value
        (its content cell). Rows whose label does not translate are skipped.

        Returns:
            The aggregate record, or None when there is no document or a
            selection failed
        """
        opts = _merge_options(
            options or VerticalTableOptions(),
            row_selector=row_selector,
            header_selector=header_selector,
            content_selector=content_selector,
            dictionary=dictionary,
            column_parsers=column_parsers,
        )
        if html is None:
            return None

        rows = _safe_select(as_document(html), opts.row_selector, 'vertical')
        if rows is None:
            return None

        translator = self.translator(opts.dictionary)
        record: Record = {}
        for row in rows:
            ok, header_cell = _safe_select_first(row, opts.header_selector, 'header')
            if not ok:
                return None
            key = translator.translate(header_cell)
            if key is None or key == '':
                continue

            ok, content_cell = _safe_select_first(row, opts.content_selector, 'content')
            if not ok:
                return None
            _apply_parser(opts.column_parsers, content_cell, record, key, self.normalizer)

        logger.debug("Vertical table from %r: %d keys", opts.row_selector, len(record))
        return record


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def translate_label_to_key(element: Any, dictionary: Mapping[Any, Any]) -> Optional[Any]:
    """Translate an element's label into a dictionary key."""
    return LabelTranslator(dictionary).translate(element)


def build_header_map(
    html: Optional[Markup],
    selector: str,
    dictionary: Mapping[Any, Any],
    first_row_header: bool = False,
    ignore_text_nodes: Optional[bool] = None,
) -> Optional[HeaderMap]:
    """Build a key -> column index map from the rows matching ``selector``."""
    return TableParser().build_header_map(
        html, selector, dictionary, first_row_header, ignore_text_nodes
    )


def extract_rows(
    html: Optional[Markup],
    selector: str,
    header_map: HeaderMap,
    column_parsers: Optional[Mapping[Any, ColumnParser]] = None,
    first_row_header: bool = False,
    ignore_text_nodes: Optional[bool] = None,
    row_filter: Optional[RowFilter] = None,
) -> Optional[List[Record]]:
    """Parse the rows matching ``selector`` into records."""
    return TableParser().extract_rows(
        html,
        selector,
        header_map,
        column_parsers,
        first_row_header,
        ignore_text_nodes,
        row_filter,
    )


def parse_table(html: Optional[Markup], **kwargs: Any) -> Optional[TableResult]:
    """Convenience function for ``TableParser().parse_table``."""
    return TableParser().parse_table(html, **kwargs)


def parse_vertical_table(html: Optional[Markup], **kwargs: Any) -> Optional[Record]:
    """Convenience function for ``TableParser().parse_vertical_table``."""
    return TableParser().parse_vertical_table(html, **kwargs)


__all__ = [
    'LabelTranslator',
    'HeaderMapper',
    'ContentExtractor',
    'TableParser',
    'default_parser',
    'translate_label_to_key',
    'build_header_map',
    'extract_rows',
    'parse_table',
    'parse_vertical_table',
]
