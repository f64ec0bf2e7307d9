"""
extraction/__init__.py - Extraction Module
============================================================================
Header mapping and table parsing components.
============================================================================
"""

from tabletext.extraction.dom import parse_html
from tabletext.extraction.table_parser import (
    LabelTranslator,
    HeaderMapper,
    ContentExtractor,
    TableParser,
    default_parser,
    translate_label_to_key,
    build_header_map,
    extract_rows,
    parse_table,
    parse_vertical_table,
)

__all__ = [
    'parse_html',
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
