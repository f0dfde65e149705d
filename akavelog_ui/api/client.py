"""Typed coroutines for each endpoint the dashboard consumes."""

from __future__ import annotations

from typing import List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from akavelog_ui.api.gateway import ApiGateway
from akavelog_ui.api.models import (
    CreateInputRequest,
    InputItem,
    InputsResponse,
    InputTypeInfo,
    InputTypesResponse,
    LogEntry,
    RecentLogsResponse,
    TestLogPayload,
    UploadStatus,
)
from akavelog_ui.config.settings import Settings, get_settings
from akavelog_ui.errors import ApiError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: Type[ModelT], payload: dict) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ApiError(
            f"API returned an unexpected {model.__name__} payload",
            details={"errors": exc.errors(include_url=False)},
        ) from exc


class AkavelogClient:
    """REST client for the ingestion server (inputs, logs, ingest)."""

    def __init__(self, gateway: ApiGateway) -> None:
        self.gateway = gateway

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AkavelogClient":
        settings = settings or get_settings()
        gateway = ApiGateway(
            settings.api_url,
            timeout_seconds=settings.request_timeout_seconds,
            transport=transport,
        )
        return cls(gateway)

    async def get_input_types(self) -> List[str]:
        payload = await self.gateway.get_json("/inputs/types")
        return _parse(InputTypesResponse, payload).types

    async def get_type_info(self, type_name: str) -> InputTypeInfo:
        payload = await self.gateway.get_json(f"/inputs/types/{quote(type_name, safe='')}")
        return _parse(InputTypeInfo, payload)

    async def get_inputs(self) -> List[InputItem]:
        payload = await self.gateway.get_json("/inputs")
        return _parse(InputsResponse, payload).inputs

    async def create_input(self, request: CreateInputRequest) -> InputItem:
        payload = await self.gateway.post_json("/inputs", request.to_body())
        return _parse(InputItem, payload)

    async def get_recent_logs(self) -> List[LogEntry]:
        payload = await self.gateway.get_json("/logs/recent")
        return _parse(RecentLogsResponse, payload).logs

    async def get_upload_status(self) -> UploadStatus:
        payload = await self.gateway.get_json("/logs/status")
        return _parse(UploadStatus, payload)

    async def send_test_log(self, ingest_path: str, payload: TestLogPayload) -> None:
        await self.gateway.post(f"/ingest/{ingest_path.lstrip('/')}", payload.to_body())

    def ingest_url(self, ingest_path: str) -> str:
        """Full URL a log shipper would post to for ``ingest_path``."""
        return self.gateway.url(f"/ingest/{ingest_path.lstrip('/')}")
