"""
feedrelic/connectors package marker.
"""

from feedrelic.connectors.insights_client import EventSubmissionError, InsightsEventClient

__all__ = [
    "EventSubmissionError",
    "InsightsEventClient",
]
