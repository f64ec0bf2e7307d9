"""
tabletext - Keyed record extraction from HTML tables.

Header labels are translated into caller-defined keys, then content rows
are projected through the resulting key -> column index map.
"""

__version__ = "1.0.0"

from tabletext.config import (
    ExtractionSettings,
    TableOptions,
    VerticalTableOptions,
    get_settings,
    configure,
    reset_settings,
)
from tabletext.core import (
    TextNormalizer,
    LabelMatcher,
    MatchKind,
    TableResult,
    normalize,
    decode_entities,
    encode_entities,
    content_hash,
)
from tabletext.extraction import (
    LabelTranslator,
    HeaderMapper,
    ContentExtractor,
    TableParser,
    parse_html,
    default_parser,
    translate_label_to_key,
    build_header_map,
    extract_rows,
    parse_table,
    parse_vertical_table,
)

__all__ = [
    '__version__',
    'ExtractionSettings',
    'TableOptions',
    'VerticalTableOptions',
    'get_settings',
    'configure',
    'reset_settings',
    'TextNormalizer',
    'LabelMatcher',
    'MatchKind',
    'TableResult',
    'normalize',
    'decode_entities',
    'encode_entities',
    'content_hash',
    'LabelTranslator',
    'HeaderMapper',
    'ContentExtractor',
    'TableParser',
    'parse_html',
    'default_parser',
    'translate_label_to_key',
    'build_header_map',
    'extract_rows',
    'parse_table',
    'parse_vertical_table',
]
