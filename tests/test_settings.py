import pytest
from pydantic import ValidationError

from akavelog_ui.config.settings import Settings


def test_defaults_match_dashboard_behaviour(monkeypatch):
    monkeypatch.delenv("AKAVELOG_API_URL", raising=False)
    settings = Settings(_env_file=None)

    assert settings.poll_interval_ms == 2000
    assert settings.poll_interval_seconds == 2.0
    assert settings.max_recent_logs == 200
    assert settings.default_input_type == "http"
    assert settings.default_title == "my-http-input"
    assert settings.request_timeout_seconds is None


def test_values_come_from_prefixed_environment(monkeypatch):
    monkeypatch.setenv("AKAVELOG_API_URL", "http://logs.internal:9000/api/")
    monkeypatch.setenv("AKAVELOG_POLL_INTERVAL_MS", "500")
    monkeypatch.setenv("AKAVELOG_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.api_url == "http://logs.internal:9000/api"
    assert settings.poll_interval_seconds == 0.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("field, value", [
    ("poll_interval_ms", 0),
    ("max_recent_logs", -1),
    ("api_url", "  "),
])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})
