from __future__ import annotations

import json

import pytest
import requests

from feedrelic.config import TransmissionSettings
from feedrelic.connectors.insights_client import EventSubmissionError, InsightsEventClient

URL = "https://insights-collector.eu01.nr-data.net/v1/accounts/9/events"


def test_posts_json_array_with_insert_key(fake_session_factory) -> None:
    session = fake_session_factory()
    client = InsightsEventClient(settings=TransmissionSettings(), session=session)

    client.post_events(url=URL, api_key="abc", events=[{"eventType": "E", "n": 1}])

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == URL
    assert call["headers"]["X-Insert-Key"] == "abc"
    assert call["headers"]["Content-Type"] == "application/json"
    assert json.loads(call["data"]) == [{"eventType": "E", "n": 1}]


def test_timeout_defaults_to_transport_default(fake_session_factory) -> None:
    session = fake_session_factory()
    InsightsEventClient(settings=TransmissionSettings(), session=session).post_events(
        url=URL, api_key="abc", events=[]
    )

    assert session.calls[0]["timeout"] is None


def test_configured_timeout_is_passed_through(fake_session_factory) -> None:
    session = fake_session_factory()
    InsightsEventClient(settings=TransmissionSettings(timeout_seconds=7.5), session=session).post_events(
        url=URL, api_key="abc", events=[]
    )

    assert session.calls[0]["timeout"] == 7.5


@pytest.mark.parametrize("status_code", [301, 400, 403, 413, 500, 503])
def test_non_2xx_raises(fake_session_factory, status_code: int) -> None:
    session = fake_session_factory(outcomes=[status_code])
    client = InsightsEventClient(settings=TransmissionSettings(), session=session)

    with pytest.raises(EventSubmissionError) as excinfo:
        client.post_events(url=URL, api_key="abc", events=[{"eventType": "E"}])

    assert excinfo.value.status_code == status_code
    assert len(session.calls) == 1


def test_transport_error_raises_without_retry(fake_session_factory) -> None:
    session = fake_session_factory(outcomes=[requests.Timeout("read timed out")])
    client = InsightsEventClient(settings=TransmissionSettings(), session=session)

    with pytest.raises(EventSubmissionError) as excinfo:
        client.post_events(url=URL, api_key="abc", events=[{"eventType": "E"}])

    assert excinfo.value.status_code is None
    assert len(session.calls) == 1


def test_unserializable_events_never_reach_the_network(fake_session_factory) -> None:
    session = fake_session_factory()
    client = InsightsEventClient(settings=TransmissionSettings(), session=session)

    with pytest.raises(EventSubmissionError):
        client.post_events(url=URL, api_key="abc", events=[{"value": float("inf")}])

    assert session.calls == []
