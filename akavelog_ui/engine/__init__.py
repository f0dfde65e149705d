"""Client-side state synchronization engine.

This module provides:
- Schema lookups and the schema-driven create form
- The input registry and ingest path derivation
- Log / upload-status pollers behind a single scheduler
- The orchestration controller tying them together
"""

from akavelog_ui.engine.controller import CreateState, OrchestrationController
from akavelog_ui.engine.form import DynamicFormModel, FormState
from akavelog_ui.engine.poller import (
    LogStreamBuffer,
    Poller,
    RetentionPolicy,
    UploadStatusMonitor,
)
from akavelog_ui.engine.registry import InputRegistry, ingest_path
from akavelog_ui.engine.scheduler import PollScheduler
from akavelog_ui.engine.schema import SchemaRegistry

__all__ = [
    # Controller
    "OrchestrationController",
    "CreateState",
    # Form
    "DynamicFormModel",
    "FormState",
    # Registries
    "InputRegistry",
    "SchemaRegistry",
    "ingest_path",
    # Polling
    "Poller",
    "RetentionPolicy",
    "LogStreamBuffer",
    "UploadStatusMonitor",
    "PollScheduler",
]
