import asyncio
from typing import Any, Dict, List, Optional

import pytest

from akavelog_ui.api.models import (
    CreateInputRequest,
    InputItem,
    InputTypeInfo,
    LogEntry,
    TestLogPayload,
    UploadStatus,
)
from akavelog_ui.config.settings import Settings
from akavelog_ui.errors import ApiError

HTTP_SCHEMA = {
    "type": "http",
    "description": "HTTP log input",
    "fields": [
        {
            "name": "port",
            "type": "number",
            "required": True,
            "description": "Listen port",
            "example": "8080",
        },
        {
            "name": "description",
            "type": "string",
            "required": False,
            "description": "Ingest path",
        },
    ],
}


def make_item(item_id: str, title: str = "input", configuration: Optional[Dict[str, Any]] = None) -> InputItem:
    return InputItem.model_validate({
        "id": item_id,
        "type": "http",
        "title": title,
        "configuration": configuration if configuration is not None else {},
        "created_at": "2026-01-01T00:00:00Z",
        "state": "running",
    })


def make_log(message: str, service: str = "svc", tags: Optional[Dict[str, str]] = None) -> LogEntry:
    return LogEntry.model_validate({
        "entry": {
            "timestamp": "2026-01-01T00:00:00Z",
            "service": service,
            "level": "info",
            "message": message,
            "tags": tags,
        },
        "received_at": "2026-01-01T00:00:01Z",
    })


class FakeClient:
    """In-memory stand-in for AkavelogClient.

    ``failures[name]`` makes that call raise; ``holds[name]`` makes it wait
    on an asyncio.Event before answering.
    """

    def __init__(self) -> None:
        self.type_infos: Dict[str, InputTypeInfo] = {"http": InputTypeInfo.model_validate(HTTP_SCHEMA)}
        self.types: List[str] = ["http"]
        self.inputs: List[InputItem] = []
        self.logs: List[LogEntry] = []
        self.status: UploadStatus = UploadStatus(batcher_enabled=True, last_upload_count=3)
        self.failures: Dict[str, ApiError] = {}
        self.holds: Dict[str, asyncio.Event] = {}
        self.calls: List[str] = []
        self.created: List[CreateInputRequest] = []
        self.sent: List[tuple] = []
        self._next_id = 1

    async def _enter(self, name: str) -> None:
        self.calls.append(name)
        hold = self.holds.get(name)
        if hold is not None:
            await hold.wait()
        if name in self.failures:
            raise self.failures[name]

    async def get_input_types(self) -> List[str]:
        await self._enter("get_input_types")
        return list(self.types)

    async def get_type_info(self, type_name: str) -> InputTypeInfo:
        await self._enter("get_type_info")
        if type_name not in self.type_infos:
            raise ApiError("unknown input type", status=404)
        return self.type_infos[type_name]

    async def get_inputs(self) -> List[InputItem]:
        await self._enter("get_inputs")
        return list(self.inputs)

    async def create_input(self, request: CreateInputRequest) -> InputItem:
        await self._enter("create_input")
        self.created.append(request)
        item = make_item(
            f"id-{self._next_id}",
            title=request.title or "http-input",
            configuration=request.config or {},
        )
        self._next_id += 1
        self.inputs.append(item)
        return item

    async def get_recent_logs(self) -> List[LogEntry]:
        await self._enter("get_recent_logs")
        return list(self.logs)

    async def get_upload_status(self) -> UploadStatus:
        await self._enter("get_upload_status")
        return self.status

    async def send_test_log(self, ingest_path: str, payload: TestLogPayload) -> None:
        await self._enter("send_test_log")
        self.sent.append((ingest_path, payload))
        self.logs.append(make_log(payload.message, service=payload.service, tags=payload.tags))

    def ingest_url(self, ingest_path: str) -> str:
        return f"http://test/api/ingest/{ingest_path}"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_url="http://test/api",
        poll_interval_ms=60000,
        max_recent_logs=200,
        default_input_type="http",
        default_title="my-http-input",
        _env_file=None,
    )


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
