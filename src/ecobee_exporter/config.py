"""Exporter configuration from environment variables and command-line flags.

Command-line flags override environment variables, which override defaults.
"""

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised for missing or invalid configuration values."""


@dataclass(frozen=True)
class ExporterConfig:
    """Settings for one exporter process.

    Attributes:
        api_key: ecobee application key.
        refresh_token: Seed refresh token, used when the token cache is empty.
        token_cache: JSON file holding the current token pair.
        metric_prefix: Prefix for all metric names.
        host: Listen address of the HTTP server.
        port: Listen port of the HTTP server.
        api_base_url: ecobee API root.
        request_timeout: Timeout for each ecobee API request, in seconds.
        log_level: Root log level name.
        log_buffer_size: Number of log entries kept for the /logs endpoint.
    """

    api_key: str = ""
    refresh_token: str | None = None
    token_cache: str = str(Path.home() / ".ecobee_exporter_tokens.json")
    metric_prefix: str = "ecobee"
    host: str = "0.0.0.0"
    port: int = 9098
    api_base_url: str = "https://api.ecobee.com"
    request_timeout: float = 30.0
    log_level: str = "INFO"
    log_buffer_size: int = 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExporterConfig":
        """Build a config from ``ECOBEE_*`` environment variables.

        Raises:
            ConfigError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            api_key=env.get("ECOBEE_API_KEY", defaults.api_key),
            refresh_token=env.get("ECOBEE_REFRESH_TOKEN") or None,
            token_cache=env.get("ECOBEE_TOKEN_CACHE", defaults.token_cache),
            metric_prefix=env.get("ECOBEE_METRIC_PREFIX", defaults.metric_prefix),
            host=env.get("ECOBEE_EXPORTER_HOST", defaults.host),
            port=_number(env, "ECOBEE_EXPORTER_PORT", int, defaults.port),
            api_base_url=env.get("ECOBEE_API_BASE_URL", defaults.api_base_url),
            request_timeout=_number(
                env, "ECOBEE_REQUEST_TIMEOUT", float, defaults.request_timeout
            ),
            log_level=env.get("ECOBEE_LOG_LEVEL", defaults.log_level).upper(),
            log_buffer_size=_number(
                env, "ECOBEE_LOG_BUFFER_SIZE", int, defaults.log_buffer_size
            ),
        )

    def validate(self) -> "ExporterConfig":
        """Check values that would only fail later at runtime.

        Returns:
            self, to allow chaining.

        Raises:
            ConfigError: On the first invalid value.
        """
        if not self.api_key:
            raise ConfigError("an ecobee API key is required (ECOBEE_API_KEY)")
        if not self.metric_prefix:
            raise ConfigError("metric prefix must not be empty")
        if not 0 < self.port < 65536:
            raise ConfigError(f"invalid port: {self.port}")
        if self.request_timeout <= 0:
            raise ConfigError(f"invalid request timeout: {self.request_timeout}")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigError(f"invalid log level: {self.log_level}")
        if self.log_buffer_size < 1:
            raise ConfigError(f"invalid log buffer size: {self.log_buffer_size}")
        return self


def _number(env: Mapping[str, str], name: str, kind: type, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a {kind.__name__}, got {raw!r}") from None


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser. Unset flags keep the env value."""
    parser = argparse.ArgumentParser(
        prog="ecobee-exporter",
        description="Prometheus exporter for ecobee thermostats.",
    )
    parser.add_argument("--api-key", dest="api_key", help="ecobee application key")
    parser.add_argument(
        "--refresh-token", dest="refresh_token", help="seed OAuth refresh token"
    )
    parser.add_argument(
        "--token-cache", dest="token_cache", help="file storing OAuth tokens"
    )
    parser.add_argument(
        "--metric-prefix", dest="metric_prefix", help="prefix for metric names"
    )
    parser.add_argument("--host", dest="host", help="listen address")
    parser.add_argument("--port", dest="port", type=int, help="listen port")
    parser.add_argument("--api-base-url", dest="api_base_url", help="ecobee API root")
    parser.add_argument(
        "--request-timeout",
        dest="request_timeout",
        type=float,
        help="ecobee API request timeout in seconds",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        help="log level",
    )
    parser.add_argument(
        "--log-buffer-size",
        dest="log_buffer_size",
        type=int,
        help="log entries kept for /logs",
    )
    return parser


def parse_args(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ExporterConfig:
    """Load configuration from the environment, then apply flags.

    Raises:
        ConfigError: If the resulting configuration is invalid.
    """
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return replace(ExporterConfig.from_env(environ), **overrides).validate()
