"""Periodic pollers for the recent-log window and the upload status.

Both are one generic ``Poller`` configured with a retention policy that
decides what happens to the held value when a poll fails:

- ``KEEP_STALE``: keep the last good value (logs are history).
- ``DROP_TO_ABSENT``: reset to the absent value (upload status is
  operational state, a stale value would mislead).

Poll failures are never surfaced to the user; the latest one is kept on
``last_error`` for diagnostics.
"""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Generic, List, Optional, TypeVar

from akavelog_ui.api.client import AkavelogClient
from akavelog_ui.api.models import LogEntry, UploadStatus
from akavelog_ui.errors import DashboardError, PollError
from akavelog_ui.logging_config import get_logger
from akavelog_ui.state import CellView, StateCell

logger = get_logger(name=__name__)

T = TypeVar("T")


class RetentionPolicy(str, Enum):
    """What a failed poll does to the held value."""
    KEEP_STALE = "keep_stale"
    DROP_TO_ABSENT = "drop_to_absent"


class Poller(Generic[T]):
    """One-shot fetch repeated by a scheduler.

    ``open()`` and ``close()`` delimit a scheduling context. A poll records
    the context it started in and only applies its outcome if that context
    is still open when the fetch completes; otherwise the outcome is
    discarded. Overlapping polls apply in completion order.
    """

    def __init__(
        self,
        name: str,
        fetch: Callable[[], Awaitable[T]],
        *,
        retention: RetentionPolicy,
        absent: T,
    ) -> None:
        self.name = name
        self.retention = retention
        self.last_error: Optional[PollError] = None
        self._fetch = fetch
        self._absent = absent
        self._cell: StateCell[T] = StateCell(name, absent)
        self._epoch = 0
        self._closed = False

    @property
    def state(self) -> CellView[T]:
        return self._cell.view()

    @property
    def value(self) -> T:
        return self._cell.value

    @property
    def is_open(self) -> bool:
        return not self._closed

    def open(self) -> None:
        self._epoch += 1
        self._closed = False

    def close(self) -> None:
        """End the current context; in-flight polls will be discarded."""
        self._epoch += 1
        self._closed = True

    def _is_current(self, epoch: int) -> bool:
        return not self._closed and epoch == self._epoch

    async def poll(self) -> bool:
        """Fetch once and apply the outcome. Returns True if a new value was applied."""
        if self._closed:
            return False
        epoch = self._epoch

        try:
            value = await self._fetch()
        except DashboardError as exc:
            if not self._is_current(epoch):
                logger.debug("Discarding {} poll failure from a closed context", self.name)
                return False
            self.last_error = PollError(self.name, exc.message, details=exc.details)
            logger.debug("{} poll failed ({}): {}", self.name, self.retention.value, exc.message)
            if self.retention is RetentionPolicy.DROP_TO_ABSENT:
                self._cell.set(self._absent)
            return False

        if not self._is_current(epoch):
            logger.debug("Discarding {} poll result from a closed context", self.name)
            return False

        self.last_error = None
        self._cell.set(value)
        return True


class LogStreamBuffer(Poller[List[LogEntry]]):
    """Recent log window, oldest first, replaced wholesale on every poll."""

    def __init__(self, client: AkavelogClient, max_entries: int = 200) -> None:
        self.max_entries = max_entries
        self._client = client
        super().__init__(
            "logs",
            self._fetch_window,
            retention=RetentionPolicy.KEEP_STALE,
            absent=[],
        )

    async def _fetch_window(self) -> List[LogEntry]:
        logs = await self._client.get_recent_logs()
        return list(logs[-self.max_entries:])

    def display_order(self) -> List[LogEntry]:
        """Newest first."""
        return list(reversed(self.value))


class UploadStatusMonitor(Poller[Optional[UploadStatus]]):
    def __init__(self, client: AkavelogClient) -> None:
        self._client = client
        super().__init__(
            "upload_status",
            client.get_upload_status,
            retention=RetentionPolicy.DROP_TO_ABSENT,
            absent=None,
        )

    @property
    def is_loading(self) -> bool:
        return self.value is None
