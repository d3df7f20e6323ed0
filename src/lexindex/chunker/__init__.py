# src/lexindex/chunker/__init__.py
"""Text segmentation for LexIndex.

This module exports:
- Chunker: Abstract base class for chunkers
- HeadingAwareChunker: Line-based chunker that follows section headings
- HeadingDetector / HeadingRule: Named heading rules used by the chunker

Example:
    from lexindex.chunker import HeadingAwareChunker

    drafts = HeadingAwareChunker(target_size=5000).chunk(text)
"""

from lexindex.chunker.base import Chunker
from lexindex.chunker.heading_aware import HeadingAwareChunker
from lexindex.chunker.headings import DEFAULT_HEADING_RULES, HeadingDetector, HeadingRule

__all__ = [
    "Chunker",
    "HeadingAwareChunker",
    "HeadingDetector",
    "HeadingRule",
    "DEFAULT_HEADING_RULES",
]
