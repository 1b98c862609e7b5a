"""Chunking engine producing fixed-size character slices."""
import logging
from typing import Callable, List, Sequence

from models.chunk import Chunk
from models.document import Document
from models.embedding import EmbeddingResult
from services.identifiers import new_id
from config import CHUNK_SIZE

logger = logging.getLogger(__name__)


class ChunkingEngine:
    """Segments document text into ordered, non-overlapping chunks."""

    def __init__(self, chunk_size: int = CHUNK_SIZE, id_factory: Callable[[], str] = new_id):
        """
        Initialize ChunkingEngine.

        Args:
            chunk_size: Chunk size in characters
            id_factory: Callable returning a fresh chunk identifier

        Raises:
            ValueError: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.chunk_size = chunk_size
        self.id_factory = id_factory

    def split_text(self, text: str) -> List[str]:
        """
        Split text into consecutive slices of ``chunk_size`` characters.

        Boundaries are purely positional; the last slice may be shorter.
        Joining the result reproduces ``text`` exactly.

        Args:
            text: Full extracted text of a document

        Returns:
            List of text spans in left-to-right order, empty for empty text
        """
        if not text:
            return []
        size = self.chunk_size
        return [text[i:i + size] for i in range(0, len(text), size)]

    def chunk_document(
        self,
        document: Document,
        spans: Sequence[str],
        embeddings: Sequence[EmbeddingResult]
    ) -> List[Chunk]:
        """
        Build Chunk objects for a document from its spans and their embeddings.

        Args:
            document: Owning document
            spans: Output of ``split_text`` for ``document.text``
            embeddings: One result per span, in the same order

        Returns:
            Chunks in slice order

        Raises:
            ValueError: If spans and embeddings differ in length
        """
        if len(spans) != len(embeddings):
            raise ValueError(
                f"Expected {len(spans)} embedding results, got {len(embeddings)}"
            )

        chunks = [
            Chunk(
                chunk_id=self.id_factory(),
                doc_id=document.doc_id,
                text=span,
                embedding=result.vector if result.available else None,
            )
            for span, result in zip(spans, embeddings)
        ]

        logger.info(f"Created {len(chunks)} chunks for document {document.name}")
        return chunks
