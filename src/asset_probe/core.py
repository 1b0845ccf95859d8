"""
Core pipeline for Asset Probe.

Runs the collectors in order, assembles the SystemInfo record and
hands it to the reporter.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from asset_probe.collectors import get_all_collectors
from asset_probe.config import Config
from asset_probe.units import round_gb
from asset_probe.uploader import Reporter, ReportResult

logger = logging.getLogger(__name__)


class ReportError(Exception):
    """Raised when the record cannot be serialized."""

    pass


@dataclass
class SystemInfo:
    """The asset record reported for this host."""

    cpu_model: str = ""
    total_memory_gb: int = 0
    total_storage_gb: int = 0
    product_model: str = ""
    os: str = ""
    os_version: str = ""
    serial_number: str = ""
    manufacturer: str = ""

    @classmethod
    def from_collected(cls, results: dict[str, dict[str, Any]]) -> SystemInfo:
        """Build the record from raw collector output."""
        facts = results.get("facts", {})
        inventory = results.get("inventory", {})

        return cls(
            cpu_model=facts.get("cpu_model", ""),
            total_memory_gb=round_gb(facts.get("memory_total", 0)),
            total_storage_gb=round_gb(facts.get("storage_total", 0)),
            product_model=inventory.get("product_model", ""),
            os=normalize_os_name(facts.get("os", "")),
            os_version=facts.get("os_version", ""),
            serial_number=inventory.get("serial_number", ""),
            manufacturer=inventory.get("manufacturer", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to its wire shape."""
        return {
            "cpuModel": self.cpu_model,
            "totalMemoryGB": self.total_memory_gb,
            "totalStorageGB": self.total_storage_gb,
            "productModel": self.product_model,
            "os": self.os,
            "osVersion": self.os_version,
            "serialNumber": self.serial_number,
            "manufacturer": self.manufacturer,
        }

    def to_json(self, indent: int | None = None) -> str:
        """
        Serialize the record to a JSON string.

        Raises:
            ReportError: If a field holds a value JSON cannot represent.
        """
        try:
            return json.dumps(self.to_dict(), indent=indent, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ReportError(f"Error marshaling JSON: {e}") from e


def normalize_os_name(name: str) -> str:
    """Report Windows hosts as WINDOWS; every other name passes through."""
    if name == "windows":
        return "WINDOWS"
    return name


class AssetProbe:
    """
    Main orchestrator for the probe.

    Collects host facts, assembles the record and reports it once.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.collectors = get_all_collectors()
        self.reporter = Reporter(self.config)

    def collect(self) -> SystemInfo:
        """
        Run every collector and assemble the record.

        A failing collector contributes empty values; collection
        always completes.
        """
        results: dict[str, dict[str, Any]] = {}

        logger.debug(f"Running {len(self.collectors)} collectors")

        for name, collector_cls in self.collectors.items():
            try:
                collector = collector_cls(self.config)
                results[name] = collector.collect()
            except Exception as e:
                logger.error(f"Collector '{name}' failed: {e}")
                results[name] = {}

        return SystemInfo.from_collected(results)

    def report(self, info: SystemInfo) -> ReportResult:
        """
        Send the record to the configured endpoint.

        Raises:
            ReportError: If the record cannot be serialized.
        """
        return self.reporter.send(info.to_json())

    def run(self) -> ReportResult | None:
        """
        Collect and report in one call.

        Returns:
            The report result, or None if the record could not be
            serialized and nothing was sent.
        """
        info = self.collect()
        try:
            return self.report(info)
        except ReportError as e:
            logger.error(str(e))
            return None


def collect_system_info(config: Config | None = None) -> SystemInfo:
    """Collect the asset record without reporting it."""
    return AssetProbe(config).collect()


def run_probe(config: Config | None = None) -> ReportResult | None:
    """Collect the asset record and report it."""
    return AssetProbe(config).run()
