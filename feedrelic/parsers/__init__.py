"""
feedrelic/parsers package marker.
"""

from feedrelic.parsers.tabular_parser import (
    TabularParseError,
    TabularParser,
    UnsupportedMediaTypeError,
    detect_format,
)

__all__ = [
    "TabularParseError",
    "TabularParser",
    "UnsupportedMediaTypeError",
    "detect_format",
]
