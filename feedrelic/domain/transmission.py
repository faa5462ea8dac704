"""
feedrelic/domain/transmission.py

Outcome models for batched event transmission.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TransmissionOutcome(str, Enum):
    """
    Classification of a finished transmission run.

    ``INTERRUPTED`` marks a run stopped from outside before its last batch.
    """

    FULL_SUCCESS = "full_success"
    PARTIAL_SUCCESS = "partial_success"
    FULL_FAILURE = "full_failure"
    INTERRUPTED = "interrupted"


class SequencerState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"


@dataclass(frozen=True)
class TransmissionResult:
    """
    End-of-run transmission summary.
    """

    success_count: int
    error_count: int
    outcome: TransmissionOutcome
    message: str

    @property
    def total(self) -> int:
        """
        Rows whose batch was attempted.
        """

        return self.success_count + self.error_count

    @property
    def succeeded(self) -> bool:
        """
        True for full and partial success.
        """

        return self.outcome in (TransmissionOutcome.FULL_SUCCESS, TransmissionOutcome.PARTIAL_SUCCESS)
