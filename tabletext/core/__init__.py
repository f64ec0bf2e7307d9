"""
core/__init__.py - Core Module
============================================================================
Text normalization and shared types.
============================================================================
"""

from tabletext.core.normalizer import (
    TextNormalizer,
    normalize,
    decode_entities,
    encode_entities,
    content_hash,
    get_normalizer,
)
from tabletext.core.types import (
    LabelMatcher,
    MatchKind,
    TableResult,
    compile_dictionary,
)

__all__ = [
    'TextNormalizer',
    'normalize',
    'decode_entities',
    'encode_entities',
    'content_hash',
    'get_normalizer',
    'LabelMatcher',
    'MatchKind',
    'TableResult',
    'compile_dictionary',
]
