"""Typed models for the ingestion server's REST contract."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


def _null_to_empty(v):
    # the server encodes an empty slice as null
    return [] if v is None else v


# ──────────────────────────────────────────────────────────────────────
# Input types and inputs
# ──────────────────────────────────────────────────────────────────────


class ConfigField(_WireModel):
    """One backend-configurable parameter of an input type."""

    name: str
    type: str = "string"
    required: bool = False
    description: str = ""
    example: Optional[str] = None

    @field_validator("example", mode="before")
    @classmethod
    def stringify_example(cls, v):
        # number fields may carry a JSON number example
        return None if v is None else str(v)


class InputTypeInfo(_WireModel):
    type: str
    description: str = ""
    fields: List[ConfigField] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def null_fields(cls, v):
        return _null_to_empty(v)


class InputTypesResponse(_WireModel):
    types: List[str] = Field(default_factory=list)

    @field_validator("types", mode="before")
    @classmethod
    def null_types(cls, v):
        return _null_to_empty(v)


class InputItem(_WireModel):
    """A provisioned ingestion endpoint."""

    id: str
    type: str
    title: str
    configuration: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    state: str = ""

    @field_validator("configuration", mode="before")
    @classmethod
    def null_configuration(cls, v):
        return {} if v is None else v


class InputsResponse(_WireModel):
    inputs: List[InputItem] = Field(default_factory=list)

    @field_validator("inputs", mode="before")
    @classmethod
    def null_inputs(cls, v):
        return _null_to_empty(v)


class CreateInputRequest(BaseModel):
    """Body of ``POST /inputs``. Unset keys are omitted, never sent as null."""

    type: str
    title: Optional[str] = None
    config: Optional[Dict[str, Any]] = None

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


# ──────────────────────────────────────────────────────────────────────
# Logs and upload status
# ──────────────────────────────────────────────────────────────────────


class LogRecord(_WireModel):
    timestamp: str = ""  # ISO8601 or unix ms, as the sender wrote it
    service: str
    level: str = "info"
    message: str
    tags: Optional[Dict[str, str]] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def stringify_timestamp(cls, v):
        return "" if v is None else str(v)


class LogEntry(_WireModel):
    entry: LogRecord
    received_at: datetime


class RecentLogsResponse(_WireModel):
    logs: List[LogEntry] = Field(default_factory=list)

    @field_validator("logs", mode="before")
    @classmethod
    def null_logs(cls, v):
        return _null_to_empty(v)


class UploadStatus(_WireModel):
    """Batcher snapshot; replaced wholesale on every poll."""

    batcher_enabled: bool = False
    last_upload_at: Optional[datetime] = None
    last_upload_key: Optional[str] = None
    last_upload_count: int = 0
    pending_count: int = 0

    @field_validator("last_upload_at", mode="after")
    @classmethod
    def zero_time_is_absent(cls, v: Optional[datetime]) -> Optional[datetime]:
        # the server reports "never uploaded" as 0001-01-01T00:00:00Z
        if v is not None and v.year <= 1:
            return None
        return v

    @field_validator("last_upload_key", mode="before")
    @classmethod
    def empty_key_is_absent(cls, v):
        return v or None


class TestLogPayload(BaseModel):
    """Body of ``POST /ingest/{path}``."""

    __test__ = False  # not a pytest test class

    service: str
    message: str
    level: str = "info"
    tags: Optional[Dict[str, str]] = None

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
