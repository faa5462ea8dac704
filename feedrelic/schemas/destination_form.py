"""
feedrelic/schemas/destination_form.py

Capture-surface schema for the destination configuration form.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from feedrelic.domain.destination import DestinationConfig, Region

FIELD_LABELS: dict[str, str] = {
    "region": "Region",
    "account_id": "New Relic Account ID",
    "api_key": "API Key",
    "event_name": "Event Name",
}


class DestinationConfigForm(BaseModel):
    """
    Submitted configuration form. Every text field is required.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
    )

    region: Literal["US", "EU"] = "US"
    account_id: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
    event_name: str = Field(min_length=1)

    @field_validator("region", mode="before")
    @classmethod
    def _normalize_region(cls, value: Any) -> Any:
        if isinstance(value, Region):
            return value.value
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def to_config(self) -> DestinationConfig:
        return DestinationConfig(
            region=Region(self.region),
            account_id=self.account_id,
            api_key=self.api_key,
            event_name=self.event_name,
        )


def describe_validation_error(exc: ValidationError) -> str:
    """
    Turn a form validation failure into one user-facing sentence.
    """

    missing: list[str] = []
    invalid: list[str] = []
    for error in exc.errors():
        location = error.get("loc") or ("form",)
        field_name = str(location[0])
        label = FIELD_LABELS.get(field_name, field_name)
        if error.get("type") in {"missing", "string_too_short"}:
            missing.append(label)
        else:
            invalid.append(label)

    parts: list[str] = []
    if missing:
        parts.append(f"Please fill in the required field(s): {', '.join(missing)}.")
    if invalid:
        parts.append(f"Invalid value for: {', '.join(invalid)}.")
    return " ".join(parts) or "Configuration is invalid."
