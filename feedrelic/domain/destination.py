"""
feedrelic/domain/destination.py

Destination configuration for the New Relic Insights insert API.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Region(str, Enum):
    """
    Data center that receives inserted events.
    """

    US = "US"
    EU = "EU"


INSIGHTS_BASE_URLS: dict[Region, str] = {
    Region.US: "https://insights-collector.newrelic.com/v1/accounts/",
    Region.EU: "https://insights-collector.eu01.nr-data.net/v1/accounts/",
}


def build_endpoint_url(region: Region | str, account_id: str) -> str:
    """
    Derive the insert endpoint for a region and account.

    An empty account id has no endpoint and yields an empty string.
    """

    account = (account_id or "").strip()
    if not account:
        return ""
    return f"{INSIGHTS_BASE_URLS[Region(region)]}{account}/events"


@dataclass(frozen=True)
class DestinationConfig:
    """
    Immutable snapshot of the destination settings.

    ``endpoint_url`` is always recomputed from ``region`` and ``account_id``
    and cannot be passed in.
    """

    region: Region = Region.US
    account_id: str = ""
    api_key: str = ""
    event_name: str = ""

    @property
    def endpoint_url(self) -> str:
        return build_endpoint_url(self.region, self.account_id)

    def __repr__(self) -> str:
        # Keep the insert key out of logs and tracebacks.
        masked = "***" if self.api_key else ""
        return (
            f"DestinationConfig(region={self.region.value!r}, account_id={self.account_id!r}, "
            f"api_key={masked!r}, event_name={self.event_name!r})"
        )
