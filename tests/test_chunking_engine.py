"""Unit tests for ChunkingEngine."""
import sys
import math
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from models.document import Document
from models.embedding import EmbeddingResult
from services.chunking_engine import ChunkingEngine


class TestChunkingEngine:
    """Test suite for ChunkingEngine."""

    @pytest.fixture
    def engine(self):
        """Create a ChunkingEngine with the default 500-character size."""
        return ChunkingEngine(chunk_size=500)

    def test_invalid_chunk_size(self):
        """Test that a non-positive chunk size is rejected."""
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            ChunkingEngine(chunk_size=0)

    def test_empty_text(self, engine):
        """Test that empty text yields no chunks."""
        assert engine.split_text("") == []

    def test_short_text_single_chunk(self, engine):
        """Test text shorter than one chunk."""
        assert engine.split_text("hello") == ["hello"]

    def test_600_characters(self, engine):
        """Test 600 characters split into 500 + 100."""
        text = "".join(chr(ord("a") + i % 26) for i in range(597)) + "XYZ"
        spans = engine.split_text(text)

        assert len(spans) == 2
        assert spans[0] == text[:500]
        assert spans[1] == text[500:]
        assert len(spans[1]) == 100
        assert "".join(spans) == text

    @pytest.mark.parametrize("length", [1, 499, 500, 501, 1000, 1234])
    def test_count_lengths_and_round_trip(self, engine, length):
        """Test ceil(len/500) chunks, full-size chunks but the last, exact reconstruction."""
        text = ("Open the store at 6am. " * 100)[:length]
        spans = engine.split_text(text)

        assert len(spans) == math.ceil(length / 500)
        assert all(len(span) == 500 for span in spans[:-1])
        assert 0 < len(spans[-1]) <= 500
        assert "".join(spans) == text

    def test_boundaries_are_positional(self):
        """Test that chunks cut mid-word."""
        engine = ChunkingEngine(chunk_size=4)
        assert engine.split_text("closing time") == ["clos", "ing ", "time"]

    def test_chunk_document_builds_ordered_chunks(self):
        """Test Chunk construction with embeddings and ids."""
        ids = iter(["c1", "c2", "c3"])
        engine = ChunkingEngine(chunk_size=3, id_factory=lambda: next(ids))
        document = Document(doc_id="d1", name="manual.pdf", pages=1, text="abcdefgh")
        spans = engine.split_text(document.text)
        embeddings = [
            EmbeddingResult.of([1.0, 0.0]),
            EmbeddingResult.unavailable("provider returned status 500"),
            EmbeddingResult.of([]),
        ]

        chunks = engine.chunk_document(document, spans, embeddings)

        assert [c.chunk_id for c in chunks] == ["c1", "c2", "c3"]
        assert [c.text for c in chunks] == ["abc", "def", "gh"]
        assert all(c.doc_id == "d1" for c in chunks)
        assert chunks[0].embedding == (1.0, 0.0)
        assert chunks[1].embedding is None
        assert chunks[2].embedding == ()

    def test_chunk_document_length_mismatch(self, engine):
        """Test that spans and embeddings must line up."""
        document = Document(doc_id="d1", name="a.pdf", pages=1, text="abc")
        with pytest.raises(ValueError, match="Expected 1 embedding results, got 0"):
            engine.chunk_document(document, ["abc"], [])
