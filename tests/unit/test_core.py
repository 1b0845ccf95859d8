"""
Unit tests for the core pipeline.

Tests the SystemInfo record, OS name normalization and AssetProbe
orchestration.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from asset_probe.config import Config
from asset_probe.core import (
    AssetProbe,
    ReportError,
    SystemInfo,
    collect_system_info,
    normalize_os_name,
    run_probe,
)
from asset_probe.uploader import ReportResult

FIELDS = {
    "cpuModel",
    "totalMemoryGB",
    "totalStorageGB",
    "productModel",
    "os",
    "osVersion",
    "serialNumber",
    "manufacturer",
}


class TestNormalizeOsName:
    """Test normalize_os_name()."""

    def test_windows_upper_cased(self):
        assert normalize_os_name("windows") == "WINDOWS"

    @pytest.mark.parametrize("name", ["linux", "darwin", "Windows", "WINDOWS", "", "windows10"])
    def test_other_values_unchanged(self, name):
        assert normalize_os_name(name) == name


class TestSystemInfo:
    """Test the SystemInfo record."""

    def test_defaults_are_empty(self):
        info = SystemInfo()
        assert info.to_dict() == {
            "cpuModel": "",
            "totalMemoryGB": 0,
            "totalStorageGB": 0,
            "productModel": "",
            "os": "",
            "osVersion": "",
            "serialNumber": "",
            "manufacturer": "",
        }

    def test_to_json_has_all_fields(self, sample_system_info):
        data = json.loads(sample_system_info.to_json())
        assert set(data) == FIELDS
        assert data["totalMemoryGB"] == 16
        assert data["os"] == "WINDOWS"

    def test_to_json_compact_by_default(self, sample_system_info):
        assert "\n" not in sample_system_info.to_json()
        assert "\n" in sample_system_info.to_json(indent=2)

    def test_to_json_rejects_nan(self):
        info = SystemInfo(total_memory_gb=float("nan"))
        with pytest.raises(ReportError, match="Error marshaling JSON"):
            info.to_json()

    def test_to_json_rejects_unserializable(self):
        info = SystemInfo(cpu_model=object())
        with pytest.raises(ReportError):
            info.to_json()

    def test_from_collected(self, sample_collected_results):
        info = SystemInfo.from_collected(sample_collected_results)

        assert info.cpu_model == "Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz"
        assert info.total_memory_gb == 16
        assert info.total_storage_gb == 477
        assert info.os == "WINDOWS"
        assert info.os_version == "10.0.19045"
        assert info.product_model == "XPS 13 9380"
        assert info.serial_number == "8XK2LR2"
        assert info.manufacturer == "Dell Inc."

    def test_from_collected_empty(self):
        assert SystemInfo.from_collected({}) == SystemInfo()


class FailingCollector:
    def __init__(self, config):
        pass

    def collect(self):
        raise RuntimeError("provider exploded")


def static_collector(data):
    class StaticCollector:
        def __init__(self, config):
            self.config = config

        def collect(self):
            return data

    return StaticCollector


class TestAssetProbe:
    """Test AssetProbe orchestration."""

    def test_init_defaults(self):
        probe = AssetProbe()
        assert isinstance(probe.config, Config)
        assert set(probe.collectors) == {"facts", "inventory"}

    def test_collect_assembles_record(self, sample_collected_results):
        probe = AssetProbe()
        probe.collectors = {
            "facts": static_collector(sample_collected_results["facts"]),
            "inventory": static_collector(sample_collected_results["inventory"]),
        }

        info = probe.collect()
        assert info.os == "WINDOWS"
        assert info.total_storage_gb == 477

    def test_collect_survives_failing_collector(self, sample_collected_results):
        probe = AssetProbe()
        probe.collectors = {
            "facts": FailingCollector,
            "inventory": static_collector(sample_collected_results["inventory"]),
        }

        info = probe.collect()
        assert info.cpu_model == ""
        assert info.total_memory_gb == 0
        assert info.manufacturer == "Dell Inc."

    def test_collectors_get_probe_config(self):
        config = Config(command_timeout=3)
        seen = []

        class RecordingCollector:
            def __init__(self, cfg):
                seen.append(cfg)

            def collect(self):
                return {}

        probe = AssetProbe(config)
        probe.collectors = {"facts": RecordingCollector}
        probe.collect()

        assert seen == [config]

    def test_report_sends_json(self, sample_system_info):
        probe = AssetProbe()
        probe.reporter = MagicMock()
        probe.reporter.send.return_value = ReportResult(success=True, status_code=200)

        result = probe.report(sample_system_info)

        assert result.success is True
        payload = probe.reporter.send.call_args.args[0]
        assert json.loads(payload) == sample_system_info.to_dict()

    def test_run_collects_and_reports(self, sample_system_info):
        probe = AssetProbe()
        probe.reporter = MagicMock()
        probe.reporter.send.return_value = ReportResult(success=True, status_code=200)

        with patch.object(probe, "collect", return_value=sample_system_info):
            result = probe.run()

        assert result.status_code == 200
        probe.reporter.send.assert_called_once()

    def test_run_aborts_before_sending_on_serialization_error(self):
        probe = AssetProbe()
        probe.reporter = MagicMock()

        with patch.object(probe, "collect", return_value=SystemInfo(total_storage_gb=float("inf"))):
            result = probe.run()

        assert result is None
        probe.reporter.send.assert_not_called()


class TestModuleHelpers:
    """Test module-level convenience functions."""

    @patch("asset_probe.core.AssetProbe")
    def test_collect_system_info(self, mock_probe_cls, sample_system_info):
        mock_probe_cls.return_value.collect.return_value = sample_system_info
        config = Config()

        assert collect_system_info(config) is sample_system_info
        mock_probe_cls.assert_called_once_with(config)

    @patch("asset_probe.core.AssetProbe")
    def test_run_probe(self, mock_probe_cls):
        expected = ReportResult(success=True, status_code=201)
        mock_probe_cls.return_value.run.return_value = expected

        assert run_probe() is expected
