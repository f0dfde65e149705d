"""Dashboard orchestration: lifecycle, user actions and the error slot."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from akavelog_ui.api.client import AkavelogClient
from akavelog_ui.api.models import InputItem, TestLogPayload
from akavelog_ui.config.settings import Settings, get_settings
from akavelog_ui.engine.form import DynamicFormModel
from akavelog_ui.engine.poller import LogStreamBuffer, UploadStatusMonitor
from akavelog_ui.engine.registry import InputRegistry, ingest_path
from akavelog_ui.engine.scheduler import PollScheduler
from akavelog_ui.engine.schema import SchemaRegistry
from akavelog_ui.errors import (
    ApiError,
    MutationError,
    RegistryFetchError,
    SchemaFetchError,
    message_or,
)
from akavelog_ui.logging_config import get_logger
from akavelog_ui.state import CellView, StateCell

logger = get_logger(name=__name__)

TEST_LOG_SERVICE = "demo-ui"
TEST_LOG_TAGS = {"source": "web"}


class CreateState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class OrchestrationController:
    """Owns every dashboard component and the only write paths to the backend.

    Usage:
        async with OrchestrationController(client) as dashboard:
            dashboard.form.set_value("port", "9000")
            await dashboard.create()
    """

    def __init__(self, client: AkavelogClient, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.client = client

        self.schemas = SchemaRegistry(client)
        self.form = DynamicFormModel(default_title=self.settings.default_title)
        self.registry = InputRegistry(client)
        self.logs = LogStreamBuffer(client, max_entries=self.settings.max_recent_logs)
        self.status = UploadStatusMonitor(client)
        self.scheduler = PollScheduler(
            [self.logs, self.status],
            interval_seconds=self.settings.poll_interval_seconds,
        )

        self._error: StateCell[Optional[str]] = StateCell("error", None)
        self._create_state: StateCell[CreateState] = StateCell("create_state", CreateState.IDLE)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "OrchestrationController":
        settings = settings or get_settings()
        return cls(AkavelogClient.from_settings(settings), settings)

    # ==================== Read side ====================

    @property
    def error(self) -> CellView[Optional[str]]:
        return self._error.view()

    @property
    def create_state(self) -> CellView[CreateState]:
        return self._create_state.view()

    @property
    def can_submit(self) -> bool:
        return self.form.available and self._create_state.value is CreateState.IDLE

    def ingest_url(self, item: InputItem) -> str:
        return self.client.ingest_url(ingest_path(item))

    # ==================== Lifecycle ====================

    async def mount(self) -> None:
        """Start polling, then load the input list and the create-form schema."""
        self.scheduler.start()
        await asyncio.gather(self.load_inputs(), self.load_schema())

    def teardown(self) -> None:
        """Stop polling. Does not wait for requests still in flight."""
        self.scheduler.stop()

    async def __aenter__(self) -> "OrchestrationController":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    async def load_schema(self, type_name: Optional[str] = None) -> bool:
        type_name = type_name or self.settings.default_input_type
        try:
            info = await self.schemas.fetch_type_info(type_name)
        except SchemaFetchError as exc:
            logger.warning("Input config for {} unavailable: {}", type_name, exc.message)
            self.form.mark_unavailable()
            return False
        self.form.load(info)
        return True

    async def load_inputs(self) -> bool:
        try:
            await self.registry.refresh()
        except RegistryFetchError as exc:
            logger.warning("Failed to load inputs: {}", exc.message)
            self._error.set(message_or(exc, "Failed to load inputs"))
            return False
        self._error.set(None)
        return True

    # ==================== Actions ====================

    async def create(self) -> Optional[InputItem]:
        """Submit the create form.

        Ignored while a submission is in flight or before the schema is
        loaded. On failure the form keeps its values so the user can fix
        and resubmit.
        """
        if not self.can_submit:
            logger.debug(
                "Create ignored (state={}, form available={})",
                self._create_state.value.value,
                self.form.available,
            )
            return None

        request = self.form.build_payload()
        self._create_state.set(CreateState.SUBMITTING)
        self._error.set(None)
        try:
            try:
                item = await self.client.create_input(request)
            except ApiError as exc:
                error = MutationError(message_or(exc, "Create failed"), details=exc.details)
                logger.warning("Create input failed: {}", error.message)
                self._error.set(error.message)
                return None

            logger.info("Created input {} ({}) -> /ingest/{}", item.title, item.id, ingest_path(item))
            await self.load_inputs()
            self.form.reset()
            return item
        finally:
            self._create_state.set(CreateState.IDLE)

    async def send_test_log(self, path: str) -> bool:
        """Post one test log to ``/ingest/<path>`` and refresh the log window right away."""
        payload = TestLogPayload(
            service=TEST_LOG_SERVICE,
            message=f"Test log at {datetime.now(timezone.utc).isoformat()}",
            level="info",
            tags=dict(TEST_LOG_TAGS),
        )
        try:
            await self.client.send_test_log(path, payload)
        except ApiError as exc:
            error = MutationError(message_or(exc, "Send failed"), details=exc.details)
            logger.warning("Send test log to /ingest/{} failed: {}", path, error.message)
            self._error.set(error.message)
            return False

        await self.logs.poll()
        return True
