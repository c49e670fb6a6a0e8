"""Server configuration.

ServerConfig is a frozen dataclass, immutable after creation.
``from_env()`` builds one from process environment variables for
container deployments.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from mocktarget.errors import ConfigurationError

DEFAULT_SERVER_NAME = "uptime-kuma-themes-mock-server"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(port=8080, time_scale=0.0, seed=42)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    workers: int = 1

    # Value of the X-Powered-By header on JSON responses ("" disables it)
    server_name: str = DEFAULT_SERVER_NAME

    # Multiplier for simulated delays (0 makes every delay instant)
    time_scale: float = 1.0

    # Seed for the shared random source (None = OS entropy)
    seed: int | None = None

    # Logging (forwarded to pounce)
    lifecycle_logging: bool = True
    log_format: str = "text"
    log_level: str = "info"
    access_log: bool = True

    # Connection handling (forwarded to pounce)
    max_connections: int = 1000
    backlog: int = 2048
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> ServerConfig:
        """Build a config from environment variables.

        Recognized variables::

            PORT              listening port (default 3000)
            HOST              bind address
            MOCK_DEBUG        dev mode with reload (true/false)
            MOCK_WORKERS      worker count for production mode
            MOCK_TIME_SCALE   multiplier for simulated delays
            MOCK_SEED         integer seed for the random source
            MOCK_SERVER_NAME  X-Powered-By header value (empty disables it)
            LOG_LEVEL         debug, info, warning, error, critical
            LOG_FORMAT        text or json

        Keyword *overrides* win over the environment.

        Raises:
            ConfigurationError: If a variable holds a malformed value.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for var, field_name, parse in _ENV_FIELDS:
            raw = env.get(var)
            if raw is None or (raw == "" and var not in _EMPTY_ALLOWED):
                continue
            try:
                values[field_name] = parse(raw)
            except ValueError as exc:
                msg = f"Invalid value for {var}: {raw!r} ({exc})"
                raise ConfigurationError(msg) from exc
        values.update(overrides)

        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            msg = f"Unknown config option(s): {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges. Raises ``ConfigurationError`` on the first problem."""
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if self.workers < 0:
            msg = f"workers must be >= 0, got {self.workers}"
            raise ConfigurationError(msg)
        if self.time_scale < 0:
            msg = f"time_scale must be >= 0, got {self.time_scale}"
            raise ConfigurationError(msg)
        if self.log_format not in ("text", "json"):
            msg = f"log_format must be 'text' or 'json', got {self.log_format!r}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            raise ConfigurationError(msg)


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    msg = "expected a boolean"
    raise ValueError(msg)


_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

# Variables where an empty string is a value rather than "unset"
_EMPTY_ALLOWED = frozenset({"MOCK_SERVER_NAME"})

_ENV_FIELDS: tuple[tuple[str, str, Callable[[str], Any]], ...] = (
    ("PORT", "port", int),
    ("HOST", "host", str),
    ("MOCK_DEBUG", "debug", _parse_bool),
    ("MOCK_WORKERS", "workers", int),
    ("MOCK_TIME_SCALE", "time_scale", float),
    ("MOCK_SEED", "seed", int),
    ("MOCK_SERVER_NAME", "server_name", str),
    ("LOG_LEVEL", "log_level", str.lower),
    ("LOG_FORMAT", "log_format", str.lower),
)
