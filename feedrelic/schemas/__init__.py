"""
feedrelic/schemas package marker.
"""

from feedrelic.schemas.destination_form import DestinationConfigForm, describe_validation_error

__all__ = [
    "DestinationConfigForm",
    "describe_validation_error",
]
