"""Config settings – GatewaySettings (policy engine + enforcement options)."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from policy_gateway.config.settings.base import Settings
from policy_gateway.config.validation import InvalidSettingValueError

_RETRY_BACKOFFS = ("fixed", "exponential")


@dataclasses.dataclass
class GatewaySettings(Settings):
    """Every option the gateway recognises, read from ``OPA_*`` variables."""

    _prefix: ClassVar[str] = "OPA"

    url: str = "http://localhost:8181"
    policy_path: str = "/v1/data/authz/allow"
    timeout_ms: int = 2000
    max_retries: int = 2
    retry_delay_ms: int = 100
    retry_backoff: str = "fixed"
    retry_jitter: bool = False
    cb_failure_threshold: int = 5
    cb_open_duration_ms: int = 30_000
    cb_half_open_wait_ms: int = 5_000
    health_path: str = "/health"
    health_timeout_ms: int = 2000
    health_interval_s: float = 0.0
    skip_paths: list[str] = dataclasses.field(
        default_factory=lambda: ["/api/public/", "/actuator/", "/health", "=/api/check-access", "=/"]
    )
    correlation_header: str = "X-Request-ID"
    jwks_uri: str = ""
    audience: str = ""
    log_level: str = "INFO"

    def _validate(self) -> None:
        for name in ("url", "policy_path", "health_path", "correlation_header"):
            if not str(getattr(self, name)).strip():
                raise InvalidSettingValueError(name, getattr(self, name), "must not be blank")
        for name in (
            "timeout_ms",
            "retry_delay_ms",
            "cb_failure_threshold",
            "cb_open_duration_ms",
            "cb_half_open_wait_ms",
            "health_timeout_ms",
        ):
            if getattr(self, name) <= 0:
                raise InvalidSettingValueError(name, getattr(self, name), "must be positive")
        if self.max_retries < 0:
            raise InvalidSettingValueError("max_retries", self.max_retries, "must be >= 0")
        if self.health_interval_s < 0:
            raise InvalidSettingValueError("health_interval_s", self.health_interval_s, "must be >= 0")
        if self.retry_backoff not in _RETRY_BACKOFFS:
            raise InvalidSettingValueError(
                "retry_backoff", self.retry_backoff, f"expected one of {', '.join(_RETRY_BACKOFFS)}"
            )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000

    @property
    def cb_open_duration_seconds(self) -> float:
        return self.cb_open_duration_ms / 1000

    @property
    def cb_half_open_wait_seconds(self) -> float:
        return self.cb_half_open_wait_ms / 1000

    @property
    def health_timeout_seconds(self) -> float:
        return self.health_timeout_ms / 1000


def load_settings(env_file: str | None = None, **overrides: object) -> GatewaySettings:
    """Build :class:`GatewaySettings` from the environment (and *env_file*)."""
    from policy_gateway.config.settings.factory import SettingsFactory
    from policy_gateway.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader

    loader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
    return SettingsFactory.create(GatewaySettings, loaders=[loader], overrides=dict(overrides) or None)


__all__ = ["GatewaySettings", "load_settings"]
