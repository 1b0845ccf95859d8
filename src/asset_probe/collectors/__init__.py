"""
Fact collectors for Asset Probe.

Collectors run in registry order: host facts first, then the
vendor asset fields from the platform inventory tool.
"""

from __future__ import annotations

from asset_probe.collectors.base import BaseCollector
from asset_probe.collectors.facts import FactError, FactsCollector
from asset_probe.collectors.inventory import InventoryCollector

COLLECTORS: dict[str, type[BaseCollector]] = {
    "facts": FactsCollector,
    "inventory": InventoryCollector,
}


def get_all_collectors() -> dict[str, type[BaseCollector]]:
    """Return all registered collectors."""
    return COLLECTORS.copy()


__all__ = [
    "BaseCollector",
    "FactError",
    "FactsCollector",
    "InventoryCollector",
    "get_all_collectors",
    "COLLECTORS",
]
