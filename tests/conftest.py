"""
Pytest fixtures and configuration for Asset Probe tests.

Provides reusable provider results, inventory tool outputs and HTTP
response mocks across the test suite.
"""

from __future__ import annotations

from collections import namedtuple
from unittest.mock import MagicMock

import pytest

from asset_probe.config import Config

GB = 1024 * 1024 * 1024

svmem = namedtuple("svmem", ["total", "available", "percent", "used", "free"])
sdiskusage = namedtuple("sdiskusage", ["total", "used", "free", "percent"])


# Test Data Fixtures - Provider Results
@pytest.fixture
def sample_cpu_info():
    """Sample result of cpuinfo.get_cpu_info()."""
    return {
        "python_version": "3.11.6.final.0 (64 bit)",
        "arch": "X86_64",
        "bits": 64,
        "count": 8,
        "brand_raw": "Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz",
        "vendor_id_raw": "GenuineIntel",
        "hz_advertised": [1800000000, 0],
        "flags": ["aes", "avx", "avx2", "sse4_2"],
    }


@pytest.fixture
def sample_virtual_memory():
    """Sample result of psutil.virtual_memory() for a 16GB host."""
    return svmem(
        total=16 * GB,
        available=8 * GB,
        percent=50.0,
        used=8 * GB,
        free=4 * GB,
    )


@pytest.fixture
def sample_disk_usage():
    """Sample result of psutil.disk_usage('/') for a 477GB volume."""
    return sdiskusage(total=512110190592, used=256 * GB, free=221 * GB, percent=53.6)


# Test Data Fixtures - Inventory Tool Outputs
@pytest.fixture
def sample_wmic_csproduct_output():
    """Sample output from wmic csproduct get name."""
    return "Name           \r\r\nXPS 13 9380    \r\r\n\r\r\n"


@pytest.fixture
def sample_wmic_bios_output():
    """Sample output from wmic bios get serialnumber."""
    return "SerialNumber  \r\r\n8XK2LR2       \r\r\n\r\r\n"


@pytest.fixture
def sample_wmic_baseboard_output():
    """Sample output from wmic baseboard get manufacturer."""
    return "Manufacturer  \r\r\nDell Inc.     \r\r\n\r\r\n"


@pytest.fixture
def sample_collected_results():
    """Raw collector output for a Windows laptop."""
    return {
        "facts": {
            "cpu_model": "Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz",
            "memory_total": 16 * GB,
            "storage_total": 512110190592,
            "os": "windows",
            "os_version": "10.0.19045",
        },
        "inventory": {
            "product_model": "XPS 13 9380",
            "serial_number": "8XK2LR2",
            "manufacturer": "Dell Inc.",
        },
    }


@pytest.fixture
def sample_system_info():
    """Sample asset record."""
    from asset_probe.core import SystemInfo

    return SystemInfo(
        cpu_model="Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz",
        total_memory_gb=16,
        total_storage_gb=477,
        product_model="XPS 13 9380",
        os="WINDOWS",
        os_version="10.0.19045",
        serial_number="8XK2LR2",
        manufacturer="Dell Inc.",
    )


# HTTP Server Fixtures
@pytest.fixture
def mock_report_server_success():
    """Mock HTTP server that accepts the record."""

    def mock_post(*args, **kwargs):
        response = MagicMock()
        response.status_code = 201
        response.reason = "Created"
        response.ok = True
        return response

    return mock_post


@pytest.fixture
def mock_report_server_error():
    """Mock HTTP server that returns a server error."""

    def mock_post(*args, **kwargs):
        response = MagicMock()
        response.status_code = 500
        response.reason = "Internal Server Error"
        response.ok = False
        return response

    return mock_post


@pytest.fixture
def mock_report_server_connection_error():
    """Mock HTTP server that refuses connections."""
    import requests

    def mock_post(*args, **kwargs):
        raise requests.exceptions.ConnectionError("Connection refused")

    return mock_post


# Utility Fixtures
@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary config file."""
    config_file = tmp_path / "asset-probe.yaml"
    config_file.write_text(
        """
report:
  url: "http://inventory.example.com/api/v1/asset/useragent"
  timeout: 15
collection:
  storage_path: /data
logging:
  level: DEBUG
"""
    )
    return config_file


@pytest.fixture
def sample_config():
    """Sample configuration for testing."""
    return Config(
        report_url="http://inventory.example.com/api/v1/asset/useragent",
        report_timeout=15,
        command_timeout=10,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ASSET_PROBE_* variables from the developer's shell out of tests."""
    import os

    for var in list(os.environ):
        if var.startswith("ASSET_PROBE_"):
            monkeypatch.delenv(var)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "cli: marks tests that drive the command line")
