# src/lexindex/chunker/heading_aware.py
"""Heading-aware chunker for long legal texts."""

from lexindex.chunker.base import Chunker
from lexindex.chunker.headings import HeadingDetector
from lexindex.exceptions import ChunkingDegradation
from lexindex.models import MAX_HEADING_LENGTH, ChunkDraft

PARAGRAPH_BREAK = "\n\n"
SENTENCE_BREAK = ". "


class HeadingAwareChunker(Chunker):
    """Split text line by line, starting new chunks at section headings.

    A heading only starts a new chunk once the buffer holds more than
    ``section_ratio`` of ``target_size`` characters; smaller buffers absorb
    the heading line as content. Buffers reaching ``target_size`` are split
    at the last paragraph break, else the last sentence break, provided it
    lies past ``split_ratio`` of the target, else exactly at the target.

    Every chunk carries the label of the last heading that started a chunk.
    Forced splits keep the label.

    Example:
        chunker = HeadingAwareChunker(target_size=5000)
        drafts = chunker.chunk(statute_text)
    """

    def __init__(
        self,
        target_size: int = 5000,
        detector: HeadingDetector | None = None,
        section_ratio: float = 0.3,
        split_ratio: float = 0.5,
    ) -> None:
        """Initialize the chunker.

        Args:
            target_size: Characters at which a chunk is force-split
            detector: Heading detector (default: legal and markdown rules)
            section_ratio: Minimum buffer fill, as a fraction of target_size,
                before a heading starts a new chunk
            split_ratio: Minimum position, as a fraction of target_size, for a
                paragraph or sentence break to be used as split point

        Raises:
            ValueError: If target_size is not positive
        """
        if target_size <= 0:
            raise ValueError(f"target_size must be positive, got {target_size}")
        self.target_size = target_size
        self.detector = detector or HeadingDetector()
        self.section_ratio = section_ratio
        self.split_ratio = split_ratio

    def chunk(self, text: str) -> list[ChunkDraft]:
        """Split text into chunk drafts.

        Raises:
            ChunkingDegradation: If the input is not text or contains binary data
        """
        if not isinstance(text, str):
            raise ChunkingDegradation(f"Expected str, got {type(text).__name__}")
        if "\x00" in text:
            raise ChunkingDegradation("Input contains NUL bytes; looks like binary content")
        if not text.strip():
            return []

        drafts: list[ChunkDraft] = []
        buffer = ""
        heading: str | None = None
        min_section = self.target_size * self.section_ratio

        for line in text.split("\n"):
            if len(buffer) > min_section and self.detector.is_heading(line):
                self._emit(drafts, buffer, heading)
                buffer = line + "\n"
                heading = line.strip()[:MAX_HEADING_LENGTH]
                continue

            buffer += line + "\n"

            while len(buffer) >= self.target_size and buffer.strip():
                split_at = self._split_point(buffer)
                self._emit(drafts, buffer[:split_at], heading)
                buffer = buffer[split_at:].strip() + "\n"

        self._emit(drafts, buffer, heading)
        return drafts

    def _split_point(self, buffer: str) -> int:
        """Pick where to cut a full buffer."""
        target = self.target_size
        threshold = target * self.split_ratio

        paragraph = buffer.rfind(PARAGRAPH_BREAK, 0, target + len(PARAGRAPH_BREAK))
        if paragraph > threshold:
            return paragraph

        sentence = buffer.rfind(SENTENCE_BREAK, 0, target + len(SENTENCE_BREAK))
        if sentence > threshold:
            return sentence + len(SENTENCE_BREAK)

        return target

    @staticmethod
    def _emit(drafts: list[ChunkDraft], text: str, heading: str | None) -> None:
        content = text.strip()
        if content:
            drafts.append(ChunkDraft(content=content, heading=heading))
