"""Tests for the heading-aware chunker."""

import pytest

from lexindex.chunker import Chunker, HeadingAwareChunker
from lexindex.exceptions import ChunkingDegradation
from lexindex.models import ChunkDraft


def non_whitespace(text: str) -> str:
    return "".join(text.split())


def paragraph(label: str, size: int) -> str:
    """A heading-free paragraph of roughly ``size`` characters."""
    sentence = f"De {label} bepaling is van toepassing op iedere werknemer. "
    return (sentence * (size // len(sentence) + 1))[:size].strip()


@pytest.fixture
def chunker():
    return HeadingAwareChunker(target_size=5000)


class TestHeadingAwareChunker:
    def test_is_chunker(self, chunker):
        assert isinstance(chunker, Chunker)

    def test_rejects_non_positive_target(self):
        with pytest.raises(ValueError):
            HeadingAwareChunker(target_size=0)

    def test_empty_input(self, chunker):
        assert chunker.chunk("") == []
        assert chunker.chunk("  \n\n  ") == []

    def test_short_text_single_chunk(self, chunker):
        drafts = chunker.chunk("Artikel 1\nDeze wet geldt voor iedereen.")
        assert drafts == [
            ChunkDraft(content="Artikel 1\nDeze wet geldt voor iedereen.", heading=None)
        ]

    def test_long_line_split_at_sentences(self, chunker):
        text = ("De werknemer heeft recht op loon. " * 353).strip()
        assert len(text) == 12001

        drafts = chunker.chunk(text)

        assert [len(d.content) for d in drafts] == [4997, 4997, 2005]
        assert all(d.content.endswith("loon.") for d in drafts)
        assert all(d.heading is None for d in drafts)

    def test_no_chunk_exceeds_target(self, chunker):
        text = "\n".join(paragraph(f"nr{i}", 900) for i in range(40))
        drafts = chunker.chunk(text)
        assert len(drafts) > 1
        # a sentence break sitting exactly at the target keeps its period
        assert all(0 < len(d.content) <= 5001 for d in drafts)

    def test_hard_split_without_breaks(self):
        chunker = HeadingAwareChunker(target_size=100)
        drafts = chunker.chunk("x" * 250)
        assert [len(d.content) for d in drafts] == [100, 100, 50]

    def test_preserves_non_whitespace_content(self, chunker):
        text = "\n".join(
            [
                "Boek 7 Bijzondere overeenkomsten",
                paragraph("eerste", 3000),
                "Artikel 7:669",
                paragraph("tweede", 6000),
                "",
                "Artikel 7:670",
                paragraph("derde", 2000),
            ]
        )
        drafts = chunker.chunk(text)
        assert non_whitespace("".join(d.content for d in drafts)) == non_whitespace(text)

    def test_deterministic(self, chunker):
        text = "\n".join(["Titel 1", paragraph("a", 4000), "Titel 2", paragraph("b", 7000)])
        assert chunker.chunk(text) == chunker.chunk(text)

    def test_heading_starts_new_chunk_after_min_section(self, chunker):
        first = paragraph("eerste", 2000)
        second = paragraph("tweede", 1000)
        text = f"Artikel 1\n{first}\nArtikel 2\n{second}"

        drafts = chunker.chunk(text)

        assert len(drafts) == 2
        assert drafts[0].heading is None
        assert drafts[0].content == f"Artikel 1\n{first}"
        assert drafts[1].heading == "Artikel 2"
        assert drafts[1].content == f"Artikel 2\n{second}"

    def test_heading_absorbed_by_small_buffer(self, chunker):
        # 1000 chars is below 30% of the target, so "Artikel 2" stays inline
        text = f"Artikel 1\n{paragraph('kort', 1000)}\nArtikel 2\n{paragraph('ook', 500)}"
        drafts = chunker.chunk(text)
        assert len(drafts) == 1
        assert "Artikel 2" in drafts[0].content

    def test_continuation_chunks_keep_heading(self, chunker):
        text = f"{paragraph('inleiding', 1600)}\nAfdeling 9\n{paragraph('lang', 12000)}"
        drafts = chunker.chunk(text)
        assert len(drafts) >= 3
        assert drafts[0].heading is None
        assert all(d.heading == "Afdeling 9" for d in drafts[1:])

    def test_prefers_paragraph_break(self):
        chunker = HeadingAwareChunker(target_size=100)
        first = "a" * 70
        text = f"{first}\n\n{'b' * 60}"
        drafts = chunker.chunk(text)
        assert drafts[0].content == first

    def test_heading_label_truncated(self, chunker):
        long_heading = "# " + "Zeer lange titel " * 20
        text = f"{paragraph('voor', 2000)}\n{long_heading}\n{paragraph('na', 100)}"
        drafts = chunker.chunk(text)
        assert len(drafts[1].heading) == 200
        assert drafts[1].content.startswith(long_heading.strip())

    def test_rejects_binary_content(self, chunker):
        with pytest.raises(ChunkingDegradation):
            chunker.chunk("PDF\x00\x01\x02")

    def test_rejects_non_text(self, chunker):
        with pytest.raises(ChunkingDegradation):
            chunker.chunk(b"Artikel 1")  # type: ignore[arg-type]
