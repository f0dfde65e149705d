import pytest

from akavelog_ui.engine.registry import InputRegistry, ingest_path
from akavelog_ui.engine.schema import SchemaRegistry
from akavelog_ui.errors import ApiError, RegistryFetchError, SchemaFetchError

from conftest import make_item


def test_ingest_path_uses_description_or_raw():
    a = make_item("a", configuration={"description": "svc-a"})
    b = make_item("b", configuration={})

    assert ingest_path(a) == "svc-a"
    assert ingest_path(b) == "raw"


def test_ingest_path_is_pure_and_follows_configuration():
    item = make_item("a", configuration={"description": "svc-a"})
    assert ingest_path(item) == ingest_path(item) == "svc-a"

    changed = item.model_copy(update={"configuration": {"description": "svc-b"}})
    assert ingest_path(changed) == "svc-b"
    assert ingest_path(make_item("c", configuration={"description": ""})) == "raw"


@pytest.mark.asyncio
async def test_refresh_replaces_snapshot(fake_client):
    registry = InputRegistry(fake_client)
    fake_client.inputs = [make_item("a"), make_item("b")]
    await registry.refresh()

    fake_client.inputs = [make_item("c")]
    items = await registry.refresh()

    assert [i.id for i in items] == ["c"]
    assert [i.id for i in registry.items.value] == ["c"]
    assert registry.get("c") is not None
    assert registry.get("a") is None


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_snapshot(fake_client):
    registry = InputRegistry(fake_client)
    fake_client.inputs = [make_item("a")]
    await registry.refresh()

    fake_client.failures["get_inputs"] = ApiError("database down", status=500)
    with pytest.raises(RegistryFetchError, match="database down"):
        await registry.refresh()

    assert [i.id for i in registry.items.value] == ["a"]


@pytest.mark.asyncio
async def test_duplicate_ids_are_rejected(fake_client):
    registry = InputRegistry(fake_client)
    fake_client.inputs = [make_item("a")]
    await registry.refresh()

    fake_client.inputs = [make_item("x"), make_item("x")]
    with pytest.raises(RegistryFetchError, match="duplicate"):
        await registry.refresh()

    assert [i.id for i in registry.items.value] == ["a"]


@pytest.mark.asyncio
async def test_schema_is_fetched_once_per_type(fake_client):
    schemas = SchemaRegistry(fake_client)

    first = await schemas.fetch_type_info("http")
    second = await schemas.fetch_type_info("http")

    assert first is second
    assert fake_client.calls.count("get_type_info") == 1


@pytest.mark.asyncio
async def test_schema_failure_is_not_cached(fake_client):
    schemas = SchemaRegistry(fake_client)
    fake_client.failures["get_type_info"] = ApiError("", status=503)

    with pytest.raises(SchemaFetchError, match="Failed to load schema"):
        await schemas.fetch_type_info("http")
    assert schemas.cached("http") is None

    del fake_client.failures["get_type_info"]
    info = await schemas.fetch_type_info("http")
    assert info.type == "http"


@pytest.mark.asyncio
async def test_list_types(fake_client):
    schemas = SchemaRegistry(fake_client)
    fake_client.types = ["http", "syslog"]

    assert await schemas.list_types() == ["http", "syslog"]
