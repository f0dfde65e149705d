"""Provisioned inputs, refreshed on demand."""

from __future__ import annotations

from typing import List, Optional

from akavelog_ui.api.client import AkavelogClient
from akavelog_ui.api.models import InputItem
from akavelog_ui.errors import ApiError, RegistryFetchError
from akavelog_ui.logging_config import get_logger
from akavelog_ui.state import CellView, StateCell

logger = get_logger(name=__name__)

RAW_INGEST_PATH = "raw"


def ingest_path(item: InputItem) -> str:
    """Route suffix for sending logs to ``item``: its configured description, else ``raw``.

    Always derived from the item, never cached.
    """
    description = item.configuration.get("description")
    if description:
        return str(description)
    return RAW_INGEST_PATH


class InputRegistry:
    """Holds the latest full snapshot of ``GET /inputs``."""

    def __init__(self, client: AkavelogClient) -> None:
        self._client = client
        self._items: StateCell[List[InputItem]] = StateCell("inputs", [])

    @property
    def items(self) -> CellView[List[InputItem]]:
        return self._items.view()

    def get(self, input_id: str) -> Optional[InputItem]:
        for item in self._items.value:
            if item.id == input_id:
                return item
        return None

    async def refresh(self) -> List[InputItem]:
        """Replace the held snapshot with the backend's current list.

        Raises:
            RegistryFetchError: the list could not be loaded. The previous
                snapshot is kept.
        """
        try:
            items = await self._client.get_inputs()
        except ApiError as exc:
            raise RegistryFetchError(
                exc.message or "Failed to load inputs",
                details={"status": exc.status},
            ) from exc

        seen = set()
        for item in items:
            if item.id in seen:
                raise RegistryFetchError(
                    f"Backend returned duplicate input id {item.id}",
                    details={"id": item.id},
                )
            seen.add(item.id)

        self._items.set(list(items))
        logger.debug("Input registry refreshed: {} inputs", len(items))
        return list(items)
