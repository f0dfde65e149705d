"""Plain-text rendering of the dashboard panels."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Sequence

import orjson

from akavelog_ui.api.models import InputItem, LogEntry, UploadStatus
from akavelog_ui.engine.controller import CreateState, OrchestrationController
from akavelog_ui.engine.form import DynamicFormModel
from akavelog_ui.engine.registry import ingest_path

RULE = "-" * 72


def _local_time(value: datetime) -> str:
    return value.astimezone().strftime("%H:%M:%S")


def _local_datetime(value: datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_error(error: Optional[str]) -> List[str]:
    if not error:
        return []
    return [f"! {error}"]


def render_form(form: DynamicFormModel, create_state: CreateState = CreateState.IDLE) -> List[str]:
    lines = ["1. Create input"]
    if not form.available:
        lines.append("   Loading input config…")
        return lines

    values = form.values
    lines.append(f"   {'Title':<28} {form.title or '(backend default)'}")
    for field in form.schema.fields:
        label = field.description or field.name
        if field.required:
            label += " *"
        value = values.get(field.name, "")
        shown = value if value else f"({field.example})" if field.example else ""
        lines.append(f"   {label:<28} {shown}")

    missing = form.missing_required()
    if missing:
        lines.append(f"   required: {', '.join(missing)}")
    lines.append("   [Creating…]" if create_state is CreateState.SUBMITTING else "   [Create input]")
    return lines


def render_inputs(
    items: Sequence[InputItem],
    url_for: Optional[Callable[[InputItem], str]] = None,
) -> List[str]:
    lines = ["2. Your inputs"]
    if not items:
        lines.append("   Create an input above. Then send a test log to /ingest/raw.")
        return lines
    for item in items:
        route = url_for(item) if url_for else f"/ingest/{ingest_path(item)}"
        lines.append(f"   {item.title:<24} {route:<36} {item.state}")
    return lines


def render_log_line(log: LogEntry) -> str:
    record = log.entry
    line = f"{_local_time(log.received_at)} {record.service} {record.level} {record.message}"
    if record.tags:
        line += " " + orjson.dumps(record.tags).decode()
    return line


def render_logs(logs_newest_first: Sequence[LogEntry], limit: int, interval_ms: int) -> List[str]:
    lines = [f"3. Incoming logs (last {limit})"]
    if not logs_newest_first:
        lines.append(
            f"   Logs will appear here after you send to /ingest/raw. "
            f"Polling every {interval_ms / 1000:g}s."
        )
        return lines
    lines.extend(f"   {render_log_line(log)}" for log in logs_newest_first)
    return lines


def render_status(status: Optional[UploadStatus]) -> List[str]:
    lines = ["Upload status (O3)"]
    if status is None:
        lines.append("   Loading…")
        return lines

    lines.append(f"   Batcher: {'On' if status.batcher_enabled else 'Off'}")
    if status.batcher_enabled:
        lines.append(f"   Last upload: {status.last_upload_count} logs")
        if status.last_upload_at is not None:
            lines.append(f"   {_local_datetime(status.last_upload_at)}")
        if status.last_upload_key:
            lines.append(f"   {status.last_upload_key}")
        if status.pending_count:
            lines.append(f"   Pending: {status.pending_count}")
    return lines


def render_dashboard(dashboard: OrchestrationController) -> str:
    sections = [
        ["Akavelog Demo", RULE],
        render_error(dashboard.error.value),
        render_form(dashboard.form, dashboard.create_state.value),
        render_inputs(dashboard.registry.items.value),
        render_logs(
            dashboard.logs.display_order(),
            dashboard.logs.max_entries,
            dashboard.settings.poll_interval_ms,
        ),
        render_status(dashboard.status.value),
    ]
    return "\n".join("\n".join(section) for section in sections if section)
