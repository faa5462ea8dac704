"""
feedrelic/services/transmission_service.py

Sends a parsed row set to the Insights insert API in fixed-size batches.

Batches are posted strictly one after another. A failed batch is counted and
logged but never stops the remaining batches, and nothing is retried. After
every batch the caller receives a progress percentage that only grows and
ends at exactly 100.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Sequence

from feedrelic.config import BATCH_SIZE, get_transmission_settings
from feedrelic.connectors.insights_client import EventSubmissionError, InsightsEventClient
from feedrelic.domain.destination import DestinationConfig
from feedrelic.domain.tabular import Row
from feedrelic.domain.transmission import SequencerState, TransmissionOutcome, TransmissionResult
from feedrelic.logging_utils import log_event

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def partition_rows(rows: Sequence[Row], batch_size: int = BATCH_SIZE) -> list[Sequence[Row]]:
    """
    Split ``rows`` into contiguous batches; only the last may be shorter.
    """

    size = max(1, batch_size)
    return [rows[start : start + size] for start in range(0, len(rows), size)]


def build_events(batch: Sequence[Row], event_name: str) -> list[dict[str, Any]]:
    """
    Tag every row with ``eventType``. Row fields are spread after the tag.
    """

    return [{"eventType": event_name, **row} for row in batch]


def progress_percent(completed: int, total: int) -> int:
    """
    Whole-number percentage, halves rounded up.
    """

    if total <= 0:
        return 100
    return (200 * completed + total) // (2 * total)


def classify_result(success_count: int, error_count: int) -> TransmissionResult:
    """
    Build the terminal result and its user-facing message.
    """

    total = success_count + error_count
    if error_count == 0:
        return TransmissionResult(
            success_count=success_count,
            error_count=error_count,
            outcome=TransmissionOutcome.FULL_SUCCESS,
            message=f"Successfully sent {success_count} records to New Relic.",
        )
    if success_count == 0:
        return TransmissionResult(
            success_count=success_count,
            error_count=error_count,
            outcome=TransmissionOutcome.FULL_FAILURE,
            message=f"Failed to send all {total} records to New Relic.",
        )
    return TransmissionResult(
        success_count=success_count,
        error_count=error_count,
        outcome=TransmissionOutcome.PARTIAL_SUCCESS,
        message=(
            f"Partially successful: Sent {success_count} records, "
            f"failed to send {error_count} records."
        ),
    )


def interrupted_result(success_count: int, error_count: int, total_rows: int) -> TransmissionResult:
    """
    Result for a run stopped from outside before its last batch.
    """

    unsent = max(0, total_rows - success_count - error_count)
    return TransmissionResult(
        success_count=success_count,
        error_count=error_count,
        outcome=TransmissionOutcome.INTERRUPTED,
        message=(
            f"Sending interrupted: Sent {success_count} records, "
            f"failed to send {error_count} records, {unsent} records not sent."
        ),
    )


# ---------------------------------------------------------------------------
# Sequencer
# ---------------------------------------------------------------------------


class BatchTransmissionSequencer:
    """
    Runs at most one transmission at a time.

    State goes idle -> sending -> idle whatever the outcome, so a failed run
    never blocks the next one. Control-flow exceptions raised from the
    progress callback (``BaseException`` subclasses such as a UI rerun) are
    re-raised after ``last_result`` is set to an interrupted result.
    """

    def __init__(
        self,
        *,
        client: InsightsEventClient,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        self._client = client
        self._batch_size = max(1, batch_size)
        self._lock = threading.Lock()
        self._state = SequencerState.IDLE
        self._last_result: TransmissionResult | None = None

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def last_result(self) -> TransmissionResult | None:
        return self._last_result

    @property
    def is_sending(self) -> bool:
        return self._state is SequencerState.SENDING

    def send(
        self,
        *,
        config: DestinationConfig | None,
        rows: Sequence[Row] | None,
        on_progress: ProgressCallback | None = None,
    ) -> TransmissionResult | None:
        """
        Transmit ``rows`` to ``config.endpoint_url``.

        Returns None without sending anything when there is no configuration,
        no rows, or another transmission is still in flight.
        """

        if config is None or not rows:
            return None

        if not self._lock.acquire(blocking=False):
            logger.warning("Transmission already in progress; ignoring send request.")
            return None

        self._state = SequencerState.SENDING
        self._last_result = None
        success_count = 0
        error_count = 0
        try:
            batches = partition_rows(rows, self._batch_size)
            log_event(
                logger,
                logging.INFO,
                "transmission_started",
                endpoint=config.endpoint_url,
                event_type=config.event_name,
                rows=len(rows),
                batches=len(batches),
            )

            for batch_number, batch in enumerate(batches, start=1):
                try:
                    events = build_events(batch, config.event_name)
                    self._client.post_events(
                        url=config.endpoint_url,
                        api_key=config.api_key,
                        events=events,
                    )
                    success_count += len(batch)
                except EventSubmissionError as exc:
                    error_count += len(batch)
                    log_event(
                        logger,
                        logging.ERROR,
                        "batch_failed",
                        batch=batch_number,
                        rows=len(batch),
                        status=exc.status_code,
                        error=str(exc),
                    )
                except Exception as exc:  # noqa: BLE001
                    error_count += len(batch)
                    logger.exception(
                        "Error sending batch to New Relic batch=%s rows=%s error=%s",
                        batch_number,
                        len(batch),
                        exc,
                    )

                if on_progress is not None:
                    on_progress(progress_percent(batch_number, len(batches)))

            result = classify_result(success_count, error_count)
            log_event(
                logger,
                logging.INFO,
                "transmission_finished",
                outcome=result.outcome.value,
                success=result.success_count,
                failed=result.error_count,
                attempted=result.total,
            )
            self._last_result = result
            return result
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error in send process: %s", exc)
            self._last_result = TransmissionResult(
                success_count=success_count,
                error_count=error_count,
                outcome=TransmissionOutcome.FULL_FAILURE,
                message=f"Error: {exc}",
            )
            return self._last_result
        except BaseException as exc:
            self._last_result = interrupted_result(success_count, error_count, len(rows))
            log_event(
                logger,
                logging.WARNING,
                "transmission_interrupted",
                reason=type(exc).__name__,
                success=success_count,
                failed=error_count,
                unsent=len(rows) - self._last_result.total,
            )
            raise
        finally:
            self._state = SequencerState.IDLE
            self._lock.release()


def build_sequencer() -> BatchTransmissionSequencer:
    """
    Build a sequencer with env-driven transport settings.
    """

    settings = get_transmission_settings()
    return BatchTransmissionSequencer(
        client=InsightsEventClient(settings=settings),
        batch_size=settings.batch_size,
    )
