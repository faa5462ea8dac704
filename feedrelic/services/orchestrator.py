"""
feedrelic/services/orchestrator.py

Wires configuration, upload, preview and send actions together and turns
their outcomes into user notifications.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Mapping

from pydantic import ValidationError

from feedrelic.domain.destination import DestinationConfig
from feedrelic.domain.tabular import ParsedFile
from feedrelic.parsers.tabular_parser import TabularParseError, TabularParser
from feedrelic.schemas.destination_form import DestinationConfigForm, describe_validation_error
from feedrelic.services.configuration_store import ConfigurationStore
from feedrelic.services.preview_service import DataPreview, build_preview
from feedrelic.services.transmission_service import (
    BatchTransmissionSequencer,
    ProgressCallback,
    build_sequencer,
)

logger = logging.getLogger(__name__)

CONFIG_SAVED_MESSAGE = "New Relic configuration saved!"
CONFIG_REQUIRED_MESSAGE = "Please save your New Relic configuration first."
SEND_IN_PROGRESS_MESSAGE = "Data is being sent; wait for it to finish before uploading."


@dataclass(frozen=True)
class Notification:
    """
    One transient message for the user.
    """

    level: Literal["success", "error", "warning"]
    message: str


class UploadOrchestrator:
    """
    Session-level shell around the store, parser and sequencer.

    Holds only the current parsed file and pending notifications.
    """

    def __init__(
        self,
        *,
        store: ConfigurationStore | None = None,
        parser: TabularParser | None = None,
        sequencer: BatchTransmissionSequencer | None = None,
    ) -> None:
        self._store = store or ConfigurationStore()
        self._parser = parser or TabularParser()
        self._sequencer = sequencer or build_sequencer()
        self._parsed: ParsedFile | None = None
        self._send_requested = False
        self._notifications: list[Notification] = []
        self._store.subscribe(self._on_config_saved)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> ConfigurationStore:
        return self._store

    @property
    def active_config(self) -> DestinationConfig | None:
        return self._store.active

    @property
    def parsed_file(self) -> ParsedFile | None:
        return self._parsed

    @property
    def upload_enabled(self) -> bool:
        return self._store.is_saved and not self.is_busy

    @property
    def is_sending(self) -> bool:
        return self._sequencer.is_sending

    @property
    def send_requested(self) -> bool:
        return self._send_requested

    @property
    def is_busy(self) -> bool:
        """
        True from the send request until the send has finished.
        """

        return self._send_requested or self._sequencer.is_sending

    @property
    def can_send(self) -> bool:
        return (
            self._store.active is not None
            and self._parsed is not None
            and not self.is_busy
        )

    def preview(self) -> DataPreview | None:
        if self._parsed is None:
            return None
        return build_preview(self._parsed)

    def drain_notifications(self) -> list[Notification]:
        pending, self._notifications = self._notifications, []
        return pending

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def submit_config(self, form_data: Mapping[str, Any]) -> Notification:
        """
        Validate the submitted form and, if complete, make it active.
        """

        try:
            form = DestinationConfigForm(**form_data)
        except ValidationError as exc:
            logger.info("Configuration form rejected errors=%s", exc.error_count())
            return self._notify("error", describe_validation_error(exc))

        self._store.load(form.to_config())
        self._store.confirm()
        return self._notifications[-1]

    def handle_upload(self, *, data: bytes, file_name: str, media_type: str | None) -> Notification:
        """
        Parse one uploaded file. A failed parse keeps the previous rows.
        """

        if not self._store.is_saved:
            return self._notify("warning", CONFIG_REQUIRED_MESSAGE)
        if self.is_busy:
            return self._notify("warning", SEND_IN_PROGRESS_MESSAGE)

        try:
            parsed = self._parser.parse(data=data, file_name=file_name, media_type=media_type)
        except TabularParseError as exc:
            logger.warning("Upload rejected file=%r reason=%s", file_name, exc)
            return self._notify("error", str(exc))

        self._parsed = parsed
        return self._notify("success", f'File "{parsed.file_name}" processed successfully!')

    def remove_file(self) -> None:
        if self.is_busy:
            return
        self._parsed = None

    def request_send(self) -> bool:
        """
        Mark a send as pending. The UI runs it on its next pass with every
        input disabled, so a click can no longer interrupt it.
        """

        if not self.can_send:
            return False
        self._send_requested = True
        return True

    def send(self, on_progress: ProgressCallback | None = None) -> Notification | None:
        """
        Transmit the current rows with a snapshot of the active configuration.

        Returns None when nothing was sent. A pending send request is always
        cleared, and an interrupted run still queues its notification before
        the interruption propagates.
        """

        config = self._store.active
        rows = self._parsed.rows if self._parsed is not None else None
        try:
            result = self._sequencer.send(config=config, rows=rows, on_progress=on_progress)
        except BaseException:
            interrupted = self._sequencer.last_result
            if interrupted is not None:
                self._notify("error", interrupted.message)
            raise
        finally:
            self._send_requested = False

        if result is None:
            return None
        return self._notify("success" if result.succeeded else "error", result.message)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_config_saved(self, config: DestinationConfig) -> None:
        self._notify("success", CONFIG_SAVED_MESSAGE)

    def _notify(self, level: Literal["success", "error", "warning"], message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self._notifications.append(notification)
        return notification
