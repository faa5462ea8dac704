"""
Shared fixtures: a stand-in requests session and ready-made configs.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable

import pytest
import requests

from feedrelic.domain.destination import DestinationConfig, Region


def make_response(status_code: int, text: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("utf-8")
    return response


class FakeSession:
    """
    Records every request and answers from a scripted list of outcomes.

    An outcome is a status code or an exception instance to raise. When the
    script runs out, every further request gets ``default_status``.
    """

    def __init__(self, outcomes: Iterable[int | Exception] = (), default_status: int = 200) -> None:
        self._outcomes = list(outcomes)
        self._default_status = default_status
        self.calls: list[dict[str, Any]] = []

    def request(self, **kwargs: Any) -> requests.Response:
        self.calls.append(kwargs)
        outcome = self._outcomes.pop(0) if self._outcomes else self._default_status
        if isinstance(outcome, Exception):
            raise outcome
        return make_response(outcome, "" if outcome < 400 else '{"error":"rejected"}')

    def payloads(self) -> list[list[dict[str, Any]]]:
        return [json.loads(call["data"]) for call in self.calls]


@pytest.fixture()
def fake_session_factory() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture()
def destination() -> DestinationConfig:
    return DestinationConfig(
        region=Region.US,
        account_id="123",
        api_key="insert-key",
        event_name="UploadedRow",
    )


def make_rows(count: int) -> tuple[dict[str, Any], ...]:
    return tuple({"index": i, "label": f"row-{i}"} for i in range(count))


@pytest.fixture()
def rows_factory() -> Callable[[int], tuple[dict[str, Any], ...]]:
    return make_rows
