"""
core/normalizer.py - Text Normalization Pipeline
============================================================================
Text cleanup applied to every label and cell read from a document.

This module handles:
- Whitespace collapsing (ASCII, ideographic and no-break spaces)
- Best-effort repair of badly encoded input
- HTML entity decoding and encoding
- Stable content hashing

Design Principles:
- None in, None out
- Encoding repair degrades to U+FFFD, it never raises
- Pure functions; the only state is the configured fallback encoding

Author: tabletext
Version: 1.0.0
============================================================================
"""

import re
import html
import json
import codecs
import hashlib
import logging
from typing import Any, Mapping, Optional, Tuple

from tabletext.config.settings import get_settings

logger = logging.getLogger(__name__)


# ============================================================================
# WHITESPACE PATTERNS
# ============================================================================

# Runs of whitespace, including ideographic (U+3000) and no-break (U+00A0)
WHITESPACE_PATTERN = re.compile(r'(?:\s|\u3000|\u00a0)+')

# Same, plus the U+00C2 U+00A0 pair left behind when UTF-8 no-break spaces are
# read as a single-byte encoding
REPAIRED_WHITESPACE_PATTERN = re.compile(r'(?:\s|\u3000|\u00a0|\u00c2\u00a0)+')


# ============================================================================
# ENCODING REPAIR
# ============================================================================

def _resolve_encoding(encoding: Optional[str]) -> str:
    """Pick the fallback encoding, falling back to ASCII if it is not a text codec."""
    name = encoding or get_settings().encoding
    try:
        info = codecs.lookup(name)
    except LookupError:
        logger.warning("Unknown fallback encoding %r, using ascii", name)
        return 'ascii'
    if not getattr(info, '_is_text_encoding', True):
        logger.warning("Fallback encoding %r is not a text codec, using ascii", name)
        return 'ascii'
    return name


def _probe_text(raw: Any, encoding: Optional[str]) -> Tuple[str, bool]:
    """
    Coerce a raw value into text.

    Returns the text and whether the encoding repair path was taken. Bytes
    are read as UTF-8; strings carrying lone surrogates (the residue of
    ``surrogateescape`` decoding) are turned back into bytes. Whatever fails
    the UTF-8 probe is re-read from the fallback encoding with undecodable
    sequences replaced.
    """
    if isinstance(raw, (bytes, bytearray)):
        data = bytes(raw)
        try:
            return data.decode('utf-8'), False
        except UnicodeDecodeError:
            return data.decode(_resolve_encoding(encoding), errors='replace'), True

    text = raw if isinstance(raw, str) else str(raw)
    try:
        text.encode('utf-8')
    except UnicodeEncodeError:
        try:
            data = text.encode('utf-8', errors='surrogateescape')
        except UnicodeEncodeError:
            data = text.encode('utf-8', errors='surrogatepass')
        logger.debug("Repairing text with invalid code points")
        return data.decode(_resolve_encoding(encoding), errors='replace'), True
    return text, False


# ============================================================================
# ENTITIES
# ============================================================================

def decode_entities(text: str) -> str:
    """Decode HTML entities, e.g. ``'a&amp;b'`` -> ``'a&b'``."""
    return html.unescape(text)


def encode_entities(text: str) -> str:
    """Encode text as valid HTML, e.g. ``'a&b>'`` -> ``'a&amp;b&gt;'``."""
    return html.escape(text, quote=True)


# ============================================================================
# HASHING
# ============================================================================

def _canonical(value: Any) -> Any:
    """Make nested mappings JSON friendly; keys keep their type name."""
    if isinstance(value, Mapping):
        return {f"{type(k).__name__}:{k}": _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def content_hash(value: Any) -> str:
    """
    Create a stable SHA-1 hex digest from a value.

    Mappings are hashed through a key-sorted JSON form so two mappings with
    the same pairs hash alike regardless of insertion order. Key and scalar
    type names are part of the payload, so ``{1: "a"}`` and ``{"1": "a"}``
    differ. Anything else is hashed through its type name and ``str()``.
    """
    if isinstance(value, Mapping):
        payload = 'mapping:' + json.dumps(
            _canonical(value), sort_keys=True, ensure_ascii=False, default=str
        )
    else:
        payload = f"{type(value).__name__}:{value}"
    return hashlib.sha1(payload.encode('utf-8', errors='surrogatepass')).hexdigest()


# ============================================================================
# NORMALIZATION PIPELINE
# ============================================================================

class TextNormalizer:
    """
    Whitespace, encoding and entity cleanup for extracted text.

    Usage:
        normalizer = TextNormalizer(encoding='cp1252')
        normalizer.normalize("  product&amp;\\u3000name ")  # 'product& name'
    """

    def __init__(self, encoding: Optional[str] = None):
        """
        Args:
            encoding: Fallback source encoding for the repair path. When
                None, ``ExtractionSettings.encoding`` is read at call time.
        """
        self.encoding = encoding

    def normalize(self, raw: Any, encoding: Optional[str] = None) -> Optional[str]:
        """
        Collapse whitespace, trim and decode entities.

        Args:
            raw: Text, bytes or any object (coerced with ``str``)
            encoding: Overrides the normalizer's fallback encoding

        Returns:
            None when ``raw`` is None, else the cleaned string
        """
        if raw is None:
            return None

        text, repaired = _probe_text(raw, encoding or self.encoding)
        pattern = REPAIRED_WHITESPACE_PATTERN if repaired else WHITESPACE_PATTERN
        text = pattern.sub(' ', text).strip()
        return decode_entities(text)

    def decode_entities(self, text: str) -> str:
        return decode_entities(text)

    def encode_entities(self, text: str) -> str:
        return encode_entities(text)

    def content_hash(self, value: Any) -> str:
        return content_hash(value)


# ============================================================================
# MODULE-LEVEL SINGLETON
# ============================================================================

_default_normalizer: Optional[TextNormalizer] = None


def get_normalizer() -> TextNormalizer:
    """Get the default normalizer instance (singleton)."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = TextNormalizer()
    return _default_normalizer


def normalize(raw: Any, encoding: Optional[str] = None) -> Optional[str]:
    """Convenience function for full normalization."""
    return get_normalizer().normalize(raw, encoding)


__all__ = [
    'TextNormalizer',
    'WHITESPACE_PATTERN',
    'REPAIRED_WHITESPACE_PATTERN',
    'normalize',
    'decode_entities',
    'encode_entities',
    'content_hash',
    'get_normalizer',
]
