"""
Reporter module for Asset Probe.

Sends the asset record to the inventory endpoint with a single POST.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from asset_probe.config import Config

logger = logging.getLogger(__name__)


@dataclass
class ReportResult:
    """Result of a report attempt."""

    success: bool
    status_code: int | None = None
    status: str | None = None
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def delivered(self) -> bool:
        """True if the server answered, whatever the status."""
        return self.status_code is not None


class Reporter:
    """
    Sends the asset record to the configured endpoint.

    One attempt per call: no retries, and the response body is not read.
    """

    def __init__(self, config: Config):
        self.config = config
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": f"asset-probe/{self._get_version()}",
                "Content-Type": "application/json",
            }
        )

    def send(self, payload: str, url: str | None = None) -> ReportResult:
        """
        POST a serialized record.

        Transport errors are logged and returned as a failed result.

        Args:
            payload: The JSON document to send.
            url: Optional override for the report endpoint.
        """
        url = url or self.config.report_url
        start_time = time.perf_counter()

        try:
            response = self.session.post(
                url,
                data=payload.encode("utf-8"),
                timeout=self.config.report_timeout,
                stream=True,
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            duration = (time.perf_counter() - start_time) * 1000
            logger.error(f"Error sending JSON: {e}")
            return ReportResult(success=False, error=str(e), duration_ms=duration)

        duration = (time.perf_counter() - start_time) * 1000
        status = f"{response.status_code} {response.reason or ''}".strip()
        response.close()

        logger.info(f"Response status: {status}")

        return ReportResult(
            success=response.ok,
            status_code=response.status_code,
            status=status,
            error=None if response.ok else f"HTTP {status}",
            duration_ms=duration,
        )

    def test_connection(self) -> bool:
        """
        Test connection to the report server.

        Returns:
            True if server is reachable, False otherwise.
        """
        try:
            base_url = self.config.report_url.rsplit("/", 1)[0]
            response = self.session.head(
                base_url,
                timeout=10,
                allow_redirects=True,
            )
            return bool(response.status_code < 500)
        except requests.exceptions.RequestException:
            return False

    def _get_version(self) -> str:
        """Get asset-probe version."""
        try:
            from asset_probe import __version__

            return __version__
        except ImportError:
            return "unknown"
