# src/lexindex/configuration/storage/__init__.py
"""Storage configurations for LexIndex."""

from lexindex.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
