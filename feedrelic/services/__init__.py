"""
feedrelic/services package marker.
"""

from feedrelic.services.configuration_store import ConfigurationStore
from feedrelic.services.orchestrator import Notification, UploadOrchestrator
from feedrelic.services.preview_service import DataPreview, build_preview
from feedrelic.services.transmission_service import (
    BatchTransmissionSequencer,
    build_sequencer,
    classify_result,
    partition_rows,
)

__all__ = [
    "BatchTransmissionSequencer",
    "ConfigurationStore",
    "DataPreview",
    "Notification",
    "UploadOrchestrator",
    "build_preview",
    "build_sequencer",
    "classify_result",
    "partition_rows",
]
