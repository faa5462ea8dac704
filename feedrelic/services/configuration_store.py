"""
feedrelic/services/configuration_store.py

Holds the destination settings for one UI session.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable

from feedrelic.domain.destination import DestinationConfig, Region

logger = logging.getLogger(__name__)

ConfigSavedListener = Callable[[DestinationConfig], None]

EDITABLE_FIELDS = frozenset({"region", "account_id", "api_key", "event_name"})


class ConfigurationStore:
    """
    Draft and active destination configuration.

    Updates only touch the draft. ``confirm`` copies the draft into the
    active snapshot and notifies listeners. The store performs no required
    field checks; the configuration form does that before confirming.
    """

    def __init__(self) -> None:
        self._draft = DestinationConfig()
        self._active: DestinationConfig | None = None
        self._listeners: list[ConfigSavedListener] = []

    @property
    def draft(self) -> DestinationConfig:
        return self._draft

    @property
    def endpoint_url(self) -> str:
        """
        Endpoint derived from the draft's region and account id.
        """

        return self._draft.endpoint_url

    @property
    def active(self) -> DestinationConfig | None:
        return self._active

    @property
    def is_saved(self) -> bool:
        return self._active is not None

    def subscribe(self, listener: ConfigSavedListener) -> None:
        self._listeners.append(listener)

    def update(self, field_name: str, value: str | Region) -> DestinationConfig:
        """
        Set one draft field and return the new draft.
        """

        if field_name not in EDITABLE_FIELDS:
            raise ValueError(
                f"Unknown configuration field '{field_name}'. "
                f"Allowed fields: {', '.join(sorted(EDITABLE_FIELDS))}."
            )

        if field_name == "region":
            value = Region(value.upper() if isinstance(value, str) else value)
        self._draft = dataclasses.replace(self._draft, **{field_name: value})
        return self._draft

    def load(self, config: DestinationConfig) -> DestinationConfig:
        """
        Apply every field of ``config`` to the draft.
        """

        for field_name in ("region", "account_id", "api_key", "event_name"):
            self.update(field_name, getattr(config, field_name))
        return self._draft

    def confirm(self) -> DestinationConfig:
        """
        Make the current draft the active configuration.
        """

        self._active = self._draft
        logger.info(
            "Destination configuration saved region=%s account_id=%s event_name=%s",
            self._active.region.value,
            self._active.account_id,
            self._active.event_name,
        )
        for listener in list(self._listeners):
            listener(self._active)
        return self._active
