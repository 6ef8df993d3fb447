"""Environment-based configuration."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dockerstats_exporter.core.errors import ConfigurationError

DEFAULT_PORT = 9200
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_INTERVAL_SECONDS = 2.0
DEFAULT_DOCKER_BIN = "docker"
DEFAULT_LOG_LEVEL = "INFO"


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")
    return port


def _parse_interval(raw: str) -> float:
    try:
        interval = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"SAMPLE_INTERVAL_SECONDS must be a number, got {raw!r}"
        ) from None
    # NaN fails this comparison too
    if not interval > 0 or interval == float("inf"):
        raise ConfigurationError(
            f"SAMPLE_INTERVAL_SECONDS must be a positive number, got {raw!r}"
        )
    return interval


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"LOG_LEVEL is not a logging level: {raw!r}")
    return level


@dataclass(frozen=True)
class ExporterConfig:
    """Settings for one exporter process.

    Attributes:
        port: TCP port the HTTP server listens on.
        host: Address the HTTP server binds to.
        interval: Seconds between the end of one sampling pass and the
            start of the next.
        docker_bin: docker executable used by the stats source.
        log_level: Root log level name.
    """

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    interval: float = DEFAULT_INTERVAL_SECONDS
    docker_bin: str = DEFAULT_DOCKER_BIN
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExporterConfig":
        """Build a config from environment variables.

        Unset or empty variables fall back to their defaults.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            value = env.get(name, "").strip()
            return value or None

        port = _get("PORT")
        host = _get("HOST")
        interval = _get("SAMPLE_INTERVAL_SECONDS")
        docker_bin = _get("DOCKER_BIN")
        log_level = _get("LOG_LEVEL")

        return cls(
            port=_parse_port(port) if port else DEFAULT_PORT,
            host=host or DEFAULT_HOST,
            interval=(
                _parse_interval(interval) if interval else DEFAULT_INTERVAL_SECONDS
            ),
            docker_bin=docker_bin or DEFAULT_DOCKER_BIN,
            log_level=_parse_log_level(log_level) if log_level else DEFAULT_LOG_LEVEL,
        )
