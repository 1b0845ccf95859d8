"""
Asset Probe - one-shot host inventory reporter.

Reads CPU, memory, disk, OS and vendor asset facts from the local machine
and reports them as a single JSON document to an asset inventory endpoint.
"""

__version__ = "0.1.0"
__author__ = "Sluggisty"

__all__ = ["__version__"]
