"""
config/settings.py - Centralized Extraction Configuration
============================================================================
Holds the process-wide defaults used by the normalizer and table parsers,
plus the per-call option bundles for horizontal and vertical tables.

Features:
- Dataclass settings with validation and defaults
- Dictionary round trip (to_dict / from_dict)
- Environment variable overrides
- Easy access throughout the package

Author: tabletext
Version: 1.0.0
============================================================================
"""

import os
import codecs
import logging
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass, field, asdict, fields, replace

logger = logging.getLogger(__name__)

# Tree builders BeautifulSoup knows how to drive
SUPPORTED_PARSERS = ('html.parser', 'lxml', 'html5lib')

# Environment variable prefix for overrides
ENV_PREFIX = 'TABLETEXT_'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


@dataclass
class ExtractionSettings:
    """Defaults shared by every extraction call."""
    # Fallback source encoding used when text fails the UTF-8 probe
    encoding: str = "ascii"

    # Decorative inline nodes removed before reading label/cell text
    decoration_selector: str = "i"

    # Drop whitespace/text nodes when enumerating row children
    ignore_text_nodes: bool = True

    # BeautifulSoup tree builder used when markup is given as a string
    parser: str = "html.parser"

    def __post_init__(self) -> None:
        if not self.encoding:
            raise ValueError("encoding must not be empty")
        try:
            info = codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding!r}")
        if not getattr(info, '_is_text_encoding', True):
            raise ValueError(f"Not a text encoding: {self.encoding!r}")
        if self.parser not in SUPPORTED_PARSERS:
            raise ValueError(
                f"Unsupported parser {self.parser!r}, expected one of {SUPPORTED_PARSERS}"
            )
        if not self.decoration_selector:
            raise ValueError("decoration_selector must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractionSettings':
        """Create from dictionary, ignoring unknown keys."""
        valid = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid})

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'ExtractionSettings':
        """
        Build settings from TABLETEXT_* environment variables.

        Unset variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type in (bool, 'bool'):
                data[f.name] = raw.strip().lower() in _TRUE_VALUES
            else:
                data[f.name] = raw.strip()
        return cls.from_dict(data)


@dataclass
class TableOptions:
    """Options for a horizontal (one record per row) table."""
    header_selector: Optional[str] = None
    content_selector: Optional[str] = None
    dictionary: Dict[Any, Any] = field(default_factory=dict)
    column_parsers: Dict[Any, Callable] = field(default_factory=dict)
    first_row_header: bool = False
    ignore_text_nodes: Optional[bool] = None  # None = use ExtractionSettings


@dataclass
class VerticalTableOptions:
    """Options for a vertical (label cell / value cell per row) table."""
    row_selector: Optional[str] = None
    header_selector: Optional[str] = None
    content_selector: Optional[str] = None
    dictionary: Dict[Any, Any] = field(default_factory=dict)
    column_parsers: Dict[Any, Callable] = field(default_factory=dict)


# Global instance
_settings: Optional[ExtractionSettings] = None


def get_settings() -> ExtractionSettings:
    """Get current settings, loading environment overrides on first use."""
    global _settings
    if _settings is None:
        _settings = ExtractionSettings.from_env()
        logger.debug("Extraction settings loaded: %s", _settings.to_dict())
    return _settings


def configure(**changes: Any) -> ExtractionSettings:
    """Replace selected settings fields and return the new settings."""
    global _settings
    _settings = replace(get_settings(), **changes)
    logger.debug("Extraction settings updated: %s", changes)
    return _settings


def reset_settings() -> None:
    """Drop the current settings; the next access reloads defaults."""
    global _settings
    _settings = None
