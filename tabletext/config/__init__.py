"""
config/__init__.py - Configuration Module
"""

from tabletext.config.settings import (
    ExtractionSettings,
    TableOptions,
    VerticalTableOptions,
    get_settings,
    configure,
    reset_settings,
    SUPPORTED_PARSERS,
)

__all__ = [
    'ExtractionSettings',
    'TableOptions',
    'VerticalTableOptions',
    'get_settings',
    'configure',
    'reset_settings',
    'SUPPORTED_PARSERS',
]
