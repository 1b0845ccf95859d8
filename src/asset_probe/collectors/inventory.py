"""
Vendor asset collector.

Reads product model, serial number and manufacturer from the platform
inventory tool (wmic). The tool prints a header line followed by the
value, so the value is taken from the second line of its output.
Hosts without the tool fall back to the DMI attributes under
/sys/class/dmi/id.
"""

from __future__ import annotations

import shutil
from typing import Any

from asset_probe.collectors.base import BaseCollector

INVENTORY_COMMANDS: dict[str, list[str]] = {
    "product_model": ["wmic", "csproduct", "get", "name"],
    "serial_number": ["wmic", "bios", "get", "serialnumber"],
    "manufacturer": ["wmic", "baseboard", "get", "manufacturer"],
}

DMI_ATTRIBUTES: dict[str, str] = {
    "product_model": "/sys/class/dmi/id/product_name",
    "serial_number": "/sys/class/dmi/id/product_serial",
    "manufacturer": "/sys/class/dmi/id/board_vendor",
}


def second_line(output: str) -> str:
    """Return the line after the header, stripped, or '' if there is none."""
    lines = output.split("\n")
    if len(lines) >= 2:
        return lines[1].strip()
    return ""


class InventoryCollector(BaseCollector):
    """Collects vendor asset fields from the platform inventory tool."""

    name = "inventory"
    description = "Product model, serial number and manufacturer"

    def collect(self) -> dict[str, Any]:
        """Collect vendor asset fields."""
        return {
            "product_model": self.retrieve_product_model(),
            "serial_number": self.retrieve_serial_number(),
            "manufacturer": self.retrieve_manufacturer(),
        }

    def retrieve_product_model(self) -> str:
        return self._retrieve("product_model")

    def retrieve_serial_number(self) -> str:
        return self._retrieve("serial_number")

    def retrieve_manufacturer(self) -> str:
        return self._retrieve("manufacturer")

    def _retrieve(self, field: str) -> str:
        cmd = INVENTORY_COMMANDS[field]
        if shutil.which(cmd[0]) is None:
            self.logger.debug(f"{cmd[0]} not available, reading {field} from DMI")
            path = DMI_ATTRIBUTES[field]
            value = self.read_file(path).strip()
            if not value:
                self.logger.warning(f"Could not read {field} from {path}")
            return value
        return self._query_tool(cmd)

    def _query_tool(self, cmd: list[str]) -> str:
        stdout, stderr, rc = self.run_command(cmd)
        if rc != 0:
            reason = stderr.strip() or f"exit status {rc}"
            self.logger.warning(f"Error executing command '{' '.join(cmd)}': {reason}")
            return ""

        self.logger.debug(f"Command output:\n{stdout}")
        return second_line(stdout)
