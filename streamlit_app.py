"""Streamlit frontend for FeedRelic.

Replaceable UI layer: all display logic lives here. Configuration, parsing
and transmission are delegated to ``UploadOrchestrator``.
"""

from __future__ import annotations

import hashlib
from typing import Optional

import pandas as pd
import streamlit as st

from feedrelic.domain.destination import Region
from feedrelic.logging_utils import configure_logging
from feedrelic.services.orchestrator import Notification, UploadOrchestrator
from feedrelic.services.preview_service import DataPreview

# ── Page config (must be first Streamlit call) ─────────────────────────────
st.set_page_config(page_title="FeedRelic", page_icon="📤", layout="wide")


@st.cache_resource(show_spinner=False)
def _configure_logging_once() -> bool:
    configure_logging()
    return True


_configure_logging_once()


# ── Session state defaults ─────────────────────────────────────────────────
_STATE_DEFAULTS: dict = {
    "uploader_key": 0,
    "uploaded_hash": None,
    "show_preview": True,
}

for _key, _val in _STATE_DEFAULTS.items():
    if _key not in st.session_state:
        st.session_state[_key] = _val

if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = UploadOrchestrator()

orchestrator: UploadOrchestrator = st.session_state.orchestrator

# Everything the user can touch is drawn disabled while a send is pending.
busy = orchestrator.is_busy

_REGION_LABELS = {
    Region.US.value: "United States (US)",
    Region.EU.value: "European Union (EU)",
}

_CONFIG_FIELDS = ("region", "account_id", "api_key", "event_name")

_TOAST_ICONS = {
    "success": "✅",
    "warning": "⚠️",
    "error": "❌",
}


# ── Widget callbacks ───────────────────────────────────────────────────────
def _on_field_change(field_name: str) -> None:
    orchestrator.store.update(field_name, st.session_state[f"cfg_{field_name}"])


def _on_save_config() -> None:
    # Widget values, not the draft: field callbacks may not have run yet.
    orchestrator.submit_config(
        {field_name: st.session_state.get(f"cfg_{field_name}", "") for field_name in _CONFIG_FIELDS}
    )


def _on_remove_file() -> None:
    orchestrator.remove_file()
    st.session_state.uploaded_hash = None
    st.session_state.uploader_key += 1


def _on_send_clicked() -> None:
    orchestrator.request_send()


# ── Section renderers ──────────────────────────────────────────────────────
def _render_config_form() -> None:
    with st.container(border=True):
        st.subheader("🔑 New Relic Configuration")

        if orchestrator.store.is_saved:
            st.success("Configuration saved successfully!")

        st.selectbox(
            "Region",
            options=list(_REGION_LABELS),
            format_func=_REGION_LABELS.get,
            key="cfg_region",
            on_change=_on_field_change,
            args=("region",),
            disabled=busy,
        )
        st.text_input(
            "New Relic Account ID",
            placeholder="Your New Relic Account ID",
            key="cfg_account_id",
            on_change=_on_field_change,
            args=("account_id",),
            disabled=busy,
        )
        st.text_input(
            "Insights API URL (Auto-generated)",
            value=orchestrator.store.endpoint_url,
            disabled=True,
            help="This URL is automatically generated based on your region and account ID",
        )
        st.text_input(
            "API Key",
            type="password",
            placeholder="Your New Relic Insights Insert API Key",
            key="cfg_api_key",
            on_change=_on_field_change,
            args=("api_key",),
            disabled=busy,
        )
        st.text_input(
            "Event Name",
            placeholder="CustomEvent",
            key="cfg_event_name",
            on_change=_on_field_change,
            args=("event_name",),
            disabled=busy,
            help="The name of the event type in New Relic",
        )
        st.button(
            "Save Configuration",
            type="primary",
            use_container_width=True,
            on_click=_on_save_config,
            disabled=busy,
        )


def _render_uploader() -> None:
    with st.container(border=True):
        st.subheader("📄 Upload Data File")

        if not orchestrator.store.is_saved:
            st.warning("Please save your New Relic configuration first.")

        uploaded_file = st.file_uploader(
            "Drag & drop a file here, or click to select",
            type=["csv", "xlsx", "xls"],
            accept_multiple_files=False,
            disabled=not orchestrator.upload_enabled,
            key=f"uploader_{st.session_state.uploader_key}",
            help="Supports CSV, XLS, and XLSX files",
        )
        if uploaded_file is not None:
            data = uploaded_file.getvalue()
            upload_hash = hashlib.sha256(data + uploaded_file.name.encode("utf-8")).hexdigest()
            if upload_hash != st.session_state.uploaded_hash:
                st.session_state.uploaded_hash = upload_hash
                orchestrator.handle_upload(
                    data=data,
                    file_name=uploaded_file.name,
                    media_type=uploaded_file.type,
                )

        parsed = orchestrator.parsed_file
        if parsed is not None:
            cols = st.columns([4, 1])
            cols[0].markdown(f"**{parsed.file_name}**  \n{parsed.file_format.label} file")
            cols[1].button(
                "Remove",
                on_click=_on_remove_file,
                help="Remove file",
                disabled=busy,
            )


def _render_preview(preview: Optional[DataPreview]) -> None:
    if preview is None:
        return

    with st.container(border=True):
        header_cols = st.columns([4, 1])
        header_cols[0].subheader("📋 Data Preview")
        header_cols[1].toggle("Show preview", key="show_preview", disabled=busy)

        st.caption(preview.summary)

        if st.session_state.show_preview:
            st.dataframe(
                pd.DataFrame(list(preview.rows), columns=list(preview.headers)),
                use_container_width=True,
                hide_index=True,
            )
            if preview.truncation_note:
                st.caption(f"_{preview.truncation_note}_")


def _render_send_button() -> None:
    if orchestrator.parsed_file is None:
        return

    with st.container(border=True):
        st.button(
            "Send Data to New Relic",
            type="primary",
            use_container_width=True,
            disabled=not orchestrator.can_send,
            on_click=_on_send_clicked,
        )
        if orchestrator.active_config is None:
            st.error("Please configure New Relic settings first.")

        if orchestrator.send_requested:
            progress_bar = st.progress(0, text="Sending Data (0%)")

            def _on_progress(percent: int) -> None:
                progress_bar.progress(percent, text=f"Sending Data ({percent}%)")

            # The request flag is cleared even when the run is interrupted,
            # so a rerun never starts the sequence again.
            orchestrator.send(on_progress=_on_progress)
            st.rerun()


def _render_how_it_works() -> None:
    with st.container(border=True):
        st.subheader("📨 How It Works")
        st.markdown(
            "1. Select your region (US or EU) and enter your New Relic Account ID\n"
            "2. Enter your New Relic Insights Insert API Key\n"
            "3. Type an event name where you want to store your data inside New Relic\n"
            "4. Upload a CSV or Excel file containing your event data\n"
            "5. Review the data preview to ensure it looks correct\n"
            '6. Click "Send Data to New Relic" to transmit the events'
        )
        st.info(
            "**Note:** Your data is processed entirely in this session. "
            "Nothing is stored once the page is closed."
        )


def _flush_notifications(notifications: list[Notification]) -> None:
    for notification in notifications:
        st.toast(notification.message, icon=_TOAST_ICONS.get(notification.level))


# ── Main content area ──────────────────────────────────────────────────────
st.title("FeedRelic")
st.caption("Send Custom Event Data To New Relic Database")

left, right = st.columns(2, gap="large")

with left:
    _render_config_form()
    _render_uploader()

with right:
    _render_preview(orchestrator.preview())
    _render_send_button()
    _render_how_it_works()

_flush_notifications(orchestrator.drain_notifications())
