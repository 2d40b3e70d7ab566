"""
CLI runner module.

Provides commands:
- init: Write a default config file
- full: Full synchronization
- since: Incremental synchronization
- force: Forced refresh of entity types
- suggest: Merchant/category suggestion
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
