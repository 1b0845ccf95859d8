"""
Base collector class that all collectors inherit from.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from asset_probe.config import Config

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract base class for all fact collectors.

    Subclasses must implement the `collect` method to gather
    their specific data. Collectors never raise on a missing fact;
    they log the failure and report an empty value instead.
    """

    name: str = "base"
    description: str = "Base collector"

    def __init__(self, config: Config | None = None):
        if config is None:
            from asset_probe.config import Config

            config = Config()
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    def collect(self) -> dict[str, Any]:
        """
        Collect and return data.

        Returns:
            Dictionary of collected data. Structure depends on collector type.
        """
        pass

    def run_command(
        self,
        cmd: list[str],
        timeout: float | None = None,
        check: bool = False,
    ) -> tuple[str, str, int]:
        """
        Run a command and return output.

        Args:
            cmd: Command and arguments as list.
            timeout: Timeout in seconds. Defaults to the configured
                     command timeout, which is None (wait forever).
            check: If True, raise on non-zero exit.

        Returns:
            Tuple of (stdout, stderr, returncode).
        """
        if timeout is None:
            timeout = self.config.command_timeout
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=check,
            )
            return result.stdout, result.stderr, result.returncode
        except subprocess.TimeoutExpired:
            self.logger.warning(f"Command timed out: {' '.join(cmd)}")
            return "", "Command timed out", -1
        except FileNotFoundError:
            self.logger.warning(f"Command not found: {cmd[0]}")
            return "", f"Command not found: {cmd[0]}", -1
        except subprocess.CalledProcessError as e:
            return e.stdout or "", e.stderr or "", e.returncode

    def read_file(self, path: str, default: str = "") -> str:
        """
        Read a file and return its contents.

        Args:
            path: Path to the file.
            default: Default value if file cannot be read.

        Returns:
            File contents or default value.
        """
        try:
            with open(path) as f:
                return f.read()
        except OSError as e:
            self.logger.debug(f"Could not read {path}: {e}")
            return default
