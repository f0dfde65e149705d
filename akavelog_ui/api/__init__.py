"""REST client layer: gateway, typed client and wire models."""

from akavelog_ui.api.client import AkavelogClient
from akavelog_ui.api.gateway import ApiGateway
from akavelog_ui.api.models import (
    ConfigField,
    CreateInputRequest,
    InputItem,
    InputTypeInfo,
    LogEntry,
    LogRecord,
    TestLogPayload,
    UploadStatus,
)

__all__ = [
    # Transport
    "ApiGateway",
    "AkavelogClient",
    # Models
    "ConfigField",
    "CreateInputRequest",
    "InputItem",
    "InputTypeInfo",
    "LogEntry",
    "LogRecord",
    "TestLogPayload",
    "UploadStatus",
]
