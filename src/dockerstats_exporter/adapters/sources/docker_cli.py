"""Stats source backed by the docker command line client."""

import logging
import subprocess

from dockerstats_exporter.core.errors import SourceUnavailableError

logger = logging.getLogger(__name__)

STATS_FORMAT = "{{json .}}"


class DockerStatsSource:
    """Runs `docker stats --no-stream` and returns its output lines.

    Implements StatsSourcePort. Every call starts a new process; nothing is
    cached between calls.

    Args:
        docker_bin: Name or path of the docker executable.
    """

    def __init__(self, docker_bin: str = "docker") -> None:
        self.docker_bin = docker_bin

    @property
    def command(self) -> list[str]:
        """The argv used to query the docker daemon."""
        return [self.docker_bin, "stats", "--no-stream", "--format", STATS_FORMAT]

    def __call__(self) -> list[str]:
        """Return one JSON record per running container.

        Raises:
            SourceUnavailableError: If docker cannot be started, exits with
                a non-zero status, or prints output that is not valid text.
        """
        try:
            result = subprocess.run(
                self.command,
                check=True,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise SourceUnavailableError(
                f"{self.docker_bin} stats exited with status {e.returncode}: {stderr}"
            ) from e
        except OSError as e:
            raise SourceUnavailableError(
                f"could not run {self.docker_bin}: {e}"
            ) from e
        except UnicodeDecodeError as e:
            raise SourceUnavailableError(
                f"{self.docker_bin} stats printed undecodable output: {e.reason}"
            ) from e

        lines = result.stdout.splitlines()
        logger.debug(
            "Read docker stats batch",
            extra={"line_count": len(lines)},
        )
        return lines
