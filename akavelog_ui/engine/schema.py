"""Input-type schema lookups."""

from __future__ import annotations

from typing import Dict, List

from akavelog_ui.api.client import AkavelogClient
from akavelog_ui.api.models import InputTypeInfo
from akavelog_ui.errors import ApiError, SchemaFetchError
from akavelog_ui.logging_config import get_logger

logger = get_logger(name=__name__)


class SchemaRegistry:
    """Fetches each input type's field schema once and keeps it for the session."""

    def __init__(self, client: AkavelogClient) -> None:
        self._client = client
        self._cache: Dict[str, InputTypeInfo] = {}

    def cached(self, type_name: str) -> InputTypeInfo | None:
        return self._cache.get(type_name)

    async def fetch_type_info(self, type_name: str) -> InputTypeInfo:
        """Return the schema for ``type_name``.

        Raises:
            SchemaFetchError: backend error, unreachable backend or malformed payload.
                Failures are not cached, a later call tries again.
        """
        info = self._cache.get(type_name)
        if info is not None:
            return info

        try:
            info = await self._client.get_type_info(type_name)
        except ApiError as exc:
            raise SchemaFetchError(
                exc.message or f"Failed to load schema for {type_name!r}",
                details={"type": type_name, "status": exc.status},
            ) from exc

        self._cache[type_name] = info
        logger.info("Loaded schema for input type {} ({} fields)", type_name, len(info.fields))
        return info

    async def list_types(self) -> List[str]:
        try:
            return await self._client.get_input_types()
        except ApiError as exc:
            raise SchemaFetchError(
                exc.message or "Failed to load input types",
                details={"status": exc.status},
            ) from exc
