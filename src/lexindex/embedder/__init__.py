# src/lexindex/embedder/__init__.py
"""Embedding functionality for LexIndex."""

from lexindex.embedder.base import Embedder
from lexindex.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
