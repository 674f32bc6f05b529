"""Unit tests – GatewaySettings, SettingsFactory and load_settings."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

import pytest

from policy_gateway.config.settings import (
    EnvSettingsLoader,
    GatewaySettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
    load_settings,
)
from policy_gateway.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("OPA_") or key.startswith("REQ_"):
            monkeypatch.delenv(key)


class TestGatewaySettingsDefaults:
    def test_defaults(self) -> None:
        s = GatewaySettings()
        assert s.url == "http://localhost:8181"
        assert s.policy_path == "/v1/data/authz/allow"
        assert s.timeout_seconds == 2.0
        assert s.max_retries == 2
        assert s.retry_delay_seconds == 0.1
        assert s.retry_backoff == "fixed"
        assert s.retry_jitter is False
        assert s.cb_failure_threshold == 5
        assert s.cb_open_duration_seconds == 30.0
        assert s.cb_half_open_wait_seconds == 5.0
        assert s.health_timeout_seconds == 2.0
        assert s.correlation_header == "X-Request-ID"
        assert "=/api/check-access" in s.skip_paths

    def test_env_key(self) -> None:
        assert GatewaySettings.env_key("cb_failure_threshold") == "OPA_CB_FAILURE_THRESHOLD"

    def test_as_dict_keyed_by_env_var(self) -> None:
        d = GatewaySettings(timeout_ms=750).as_dict()
        assert d["OPA_TIMEOUT_MS"] == 750
        assert d["OPA_URL"] == "http://localhost:8181"
        assert "OPA__PREFIX" not in d

    def test_skip_paths_not_shared(self) -> None:
        a, b = GatewaySettings(), GatewaySettings()
        a.skip_paths.append("/extra")
        assert "/extra" not in b.skip_paths


class TestGatewaySettingsValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"url": " "},
            {"policy_path": ""},
            {"timeout_ms": 0},
            {"retry_delay_ms": -5},
            {"cb_failure_threshold": 0},
            {"cb_open_duration_ms": 0},
            {"max_retries": -1},
            {"health_interval_s": -1.0},
            {"retry_backoff": "fibonacci"},
        ],
    )
    def test_rejects_invalid_values(self, overrides: dict[str, object]) -> None:
        with pytest.raises(InvalidSettingValueError):
            GatewaySettings(**overrides)  # type: ignore[arg-type]

    def test_invalid_value_serialises_setting(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            GatewaySettings(timeout_ms=0)
        d = exc_info.value.to_dict()
        assert d["code"] == "invalid_setting_value"
        assert d["setting"] == "timeout_ms"
        assert d["reason"] == "must be positive"

    def test_zero_retries_allowed(self) -> None:
        assert GatewaySettings(max_retries=0).max_retries == 0


class TestLoadSettings:
    def test_reads_opa_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPA_URL", "http://opa:8181")
        monkeypatch.setenv("OPA_TIMEOUT_MS", "750")
        monkeypatch.setenv("OPA_RETRY_BACKOFF", "exponential")
        monkeypatch.setenv("OPA_RETRY_JITTER", "true")
        monkeypatch.setenv("OPA_SKIP_PATHS", "/public/,=/")
        s = load_settings()
        assert s.url == "http://opa:8181"
        assert s.timeout_seconds == 0.75
        assert s.retry_backoff == "exponential"
        assert s.retry_jitter is True
        assert s.skip_paths == ["/public/", "=/"]

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPA_MAX_RETRIES", "4")
        assert load_settings(max_retries=1).max_retries == 1

    def test_invalid_env_value_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPA_TIMEOUT_MS", "soon")
        with pytest.raises(InvalidSettingValueError):
            load_settings()

    def test_semantically_invalid_env_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPA_CB_FAILURE_THRESHOLD", "0")
        with pytest.raises(ConfigError):
            load_settings()

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OPA_URL", raising=False)
        env_file = tmp_path / "gateway.env"
        env_file.write_text("OPA_URL=http://from-file:8181\n")
        assert load_settings(str(env_file)).url == "http://from-file:8181"


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"
    api_key: str
    region: str = "eu"


class StaticLoader(SettingsLoader):
    def __init__(self, **values: Any) -> None:
        self.values = values

    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        return dict(self.values)


class TestSettingsFactory:
    def test_missing_required_reported(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            SettingsFactory.create(RequiredSettings, loaders=[EnvSettingsLoader()])
        assert exc_info.value.setting_name == "REQ_API_KEY"

    def test_override_supplies_required(self) -> None:
        s = SettingsFactory.create(RequiredSettings, loaders=[EnvSettingsLoader()], overrides={"api_key": "k"})
        assert s.api_key == "k"

    def test_later_loader_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQ_API_KEY", "from-env")
        s = SettingsFactory.create(RequiredSettings, loaders=[EnvSettingsLoader(), EnvSettingsLoader()])
        assert s.api_key == "from-env"

    def test_later_loader_does_not_reset_to_default(self) -> None:
        s = SettingsFactory.create(
            RequiredSettings,
            loaders=[StaticLoader(api_key="k", region="us"), StaticLoader(api_key="k2")],
        )
        assert s.api_key == "k2"
        assert s.region == "us"

    def test_invalid_value_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPA_RETRY_JITTER", "maybe")
        with pytest.raises(InvalidSettingValueError) as exc_info:
            SettingsFactory.create(GatewaySettings, loaders=[EnvSettingsLoader()])
        assert exc_info.value.setting_name == "OPA_RETRY_JITTER"
