"""
feedrelic/domain package marker.
"""

from feedrelic.domain.destination import DestinationConfig, Region, build_endpoint_url
from feedrelic.domain.tabular import FileFormat, ParsedFile, Row, RowSet
from feedrelic.domain.transmission import SequencerState, TransmissionOutcome, TransmissionResult

__all__ = [
    "DestinationConfig",
    "FileFormat",
    "ParsedFile",
    "Region",
    "Row",
    "RowSet",
    "SequencerState",
    "TransmissionOutcome",
    "TransmissionResult",
    "build_endpoint_url",
]
