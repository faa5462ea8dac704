"""
feedrelic/connectors/insights_client.py

HTTP client for the New Relic Insights insert API.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Sequence

import requests

from feedrelic.config import TransmissionSettings

logger = logging.getLogger(__name__)

INSERT_KEY_HEADER = "X-Insert-Key"

# Longest response body kept on a failed submission.
_MAX_ERROR_BODY_CHARS = 500


class EventSubmissionError(RuntimeError):
    """
    Raised when one batch of events is not accepted by the endpoint.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InsightsEventClient:
    """
    Posts event batches to an Insights insert endpoint.

    One call is one request. No retry or backoff is applied.
    """

    def __init__(
        self,
        *,
        settings: TransmissionSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_seconds = settings.timeout_seconds

    def post_events(
        self,
        *,
        url: str,
        api_key: str,
        events: Sequence[Mapping[str, Any]],
    ) -> requests.Response:
        """
        Submit one batch and return the accepted response.

        Raises EventSubmissionError for serialization failures, transport
        failures and non-2xx responses.
        """

        try:
            body = json.dumps(list(events), allow_nan=False, default=str)
        except (TypeError, ValueError) as exc:
            raise EventSubmissionError(f"Event batch could not be serialized: {exc}") from exc

        headers = {
            "Content-Type": "application/json",
            INSERT_KEY_HEADER: api_key,
        }

        try:
            response = self._session.request(
                method="POST",
                url=url,
                data=body.encode("utf-8"),
                headers=headers,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise EventSubmissionError(f"Request to insert endpoint failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            error_text = (response.text or "")[:_MAX_ERROR_BODY_CHARS]
            logger.error(
                "Insights API rejected batch status=%s url=%s body=%s",
                response.status_code,
                url,
                error_text,
            )
            raise EventSubmissionError(
                f"Insert endpoint returned HTTP {response.status_code}.",
                status_code=response.status_code,
                body=error_text,
            )

        return response
