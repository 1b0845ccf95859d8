"""
Host facts collector.

Queries CPU, memory, root volume and OS facts from the host-facts
providers (py-cpuinfo, psutil, platform/distro). Each provider result is
round-tripped through JSON into a minimal local shape and one or two
fields are read from it.
"""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass
from typing import Any, Callable

import cpuinfo
import distro
import psutil

from asset_probe.collectors.base import BaseCollector


class FactError(Exception):
    """Raised when a provider result does not contain the expected fact."""

    pass


def to_plain(obj: Any) -> Any:
    """
    Coerce a provider result into plain JSON data.

    Named tuples (psutil) become objects, sequences become arrays.

    Raises:
        TypeError: If the result holds values JSON cannot represent.
    """
    if hasattr(obj, "_asdict"):
        obj = obj._asdict()
    elif isinstance(obj, (list, tuple)):
        obj = [item._asdict() if hasattr(item, "_asdict") else item for item in obj]
    return json.loads(json.dumps(obj))


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise FactError(f"unexpected {what} info: {type(data).__name__}")
    return data


def _byte_count(data: dict[str, Any], key: str, what: str) -> int:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise FactError(f"invalid {what} {key}: {value!r}")
    return value


@dataclass
class CPUInfo:
    """The CPU fields the probe reads."""

    model_name: str = ""

    @classmethod
    def from_plain(cls, data: Any) -> CPUInfo:
        data = _require_mapping(data, "CPU")
        model_name = data.get("brand_raw") or data.get("modelName") or ""
        if not isinstance(model_name, str):
            raise FactError(f"invalid CPU model name: {model_name!r}")
        return cls(model_name=model_name.strip())


@dataclass
class MemoryInfo:
    """The memory fields the probe reads."""

    total: int = 0

    @classmethod
    def from_plain(cls, data: Any) -> MemoryInfo:
        return cls(total=_byte_count(_require_mapping(data, "memory"), "total", "memory"))


@dataclass
class StorageInfo:
    """The disk usage fields the probe reads."""

    total: int = 0

    @classmethod
    def from_plain(cls, data: Any) -> StorageInfo:
        return cls(total=_byte_count(_require_mapping(data, "storage"), "total", "storage"))


@dataclass
class HostInfo:
    """The host OS fields the probe reads."""

    os: str = ""
    platform_version: str = ""

    @classmethod
    def from_plain(cls, data: Any) -> HostInfo:
        data = _require_mapping(data, "host")
        os_name = data.get("os") or ""
        version = data.get("platformVersion") or ""
        if not isinstance(os_name, str) or not isinstance(version, str):
            raise FactError(f"invalid host info: {data!r}")
        return cls(os=os_name, platform_version=version)


def extract_cpu_model_name(plain: Any) -> str:
    """
    Extract the CPU model name from plain CPU data.

    Accepts a single mapping or a list of per-CPU mappings, in which case
    the first entry wins.

    Raises:
        FactError: If no CPU information is found.
    """
    if isinstance(plain, list):
        if not plain:
            raise FactError("no CPU information found")
        plain = plain[0]
    info = CPUInfo.from_plain(plain)
    if not info.model_name:
        raise FactError("no CPU information found")
    return info.model_name


def root_volume(path: str) -> str:
    """Return the root volume to measure; '/' maps to the system drive on Windows."""
    if path == "/" and platform.system() == "Windows":
        return os.environ.get("SystemDrive", "C:") + "\\"
    return path


def host_facts() -> dict[str, str]:
    """Query host OS facts in the platform's own terms."""
    system = platform.system()
    if system == "Linux":
        version = distro.version()
        platform_name = distro.id()
    elif system == "Darwin":
        version = platform.mac_ver()[0]
        platform_name = "darwin"
    else:
        version = platform.version()
        platform_name = system.lower()

    return {
        "hostname": platform.node(),
        "os": system.lower(),
        "platform": platform_name,
        "platformVersion": version,
        "kernelVersion": platform.release(),
        "kernelArch": platform.machine(),
    }


class FactsCollector(BaseCollector):
    """Collects CPU, memory, storage and OS facts."""

    name = "facts"
    description = "CPU model, memory and storage totals, OS name and version"

    def collect(self) -> dict[str, Any]:
        """Collect host facts, in pipeline order."""
        cpu_model = self.retrieve_cpu_model()
        memory_total = self.retrieve_memory_total()
        storage_total = self.retrieve_storage_total()
        os_name, os_version = self.retrieve_host_info()

        return {
            "cpu_model": cpu_model,
            "memory_total": memory_total,
            "storage_total": storage_total,
            "os": os_name,
            "os_version": os_version,
        }

    def _query(self, what: str, provider: Callable[[], Any]) -> Any | None:
        """Call a provider and return its result as plain data, or None on failure."""
        try:
            raw = provider()
        except Exception as e:
            self.logger.error(f"Failed to retrieve {what} info: {e}")
            return None

        try:
            return to_plain(raw)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Failed to convert {what} info to JSON: {e}")
            return None

    def retrieve_cpu_model(self) -> str:
        """Return the CPU model name, or an empty string."""
        plain = self._query("CPU", cpuinfo.get_cpu_info)
        if plain is None:
            return ""

        try:
            model_name = extract_cpu_model_name(plain)
        except FactError as e:
            self.logger.error(f"Error extracting model name: {e}")
            return ""

        self.logger.info(f"CPU model name: {model_name}")
        return model_name

    def retrieve_memory_total(self) -> int:
        """Return total physical memory in bytes, or 0."""
        plain = self._query("memory", psutil.virtual_memory)
        if plain is None:
            return 0

        try:
            memory = MemoryInfo.from_plain(plain)
        except FactError as e:
            self.logger.error(f"Error reading memory info: {e}")
            return 0

        self.logger.info(f"Total memory: {memory.total}")
        return memory.total

    def retrieve_storage_total(self, path: str | None = None) -> int:
        """Return the size of the root volume in bytes, or 0."""
        volume = root_volume(path or self.config.storage_path)
        plain = self._query("disk", lambda: psutil.disk_usage(volume))
        if plain is None:
            return 0

        try:
            storage = StorageInfo.from_plain(plain)
        except FactError as e:
            self.logger.error(f"Error reading storage info: {e}")
            return 0

        self.logger.info(f"Total storage: {storage.total}")
        return storage.total

    def retrieve_host_info(self) -> tuple[str, str]:
        """Return (os, os_version), or empty strings."""
        plain = self._query("host", host_facts)
        if plain is None:
            return "", ""

        try:
            host = HostInfo.from_plain(plain)
        except FactError as e:
            self.logger.error(f"Error reading host info: {e}")
            return "", ""

        self.logger.info(f"Host OS: {host.os} {host.platform_version}")
        return host.os, host.platform_version
