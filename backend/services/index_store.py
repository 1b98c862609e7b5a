"""In-memory chunk index."""
import logging
from typing import Dict, List, Sequence, Tuple

from models.chunk import Chunk

logger = logging.getLogger(__name__)


class IndexStore:
    """Append-only, insertion-ordered store of chunks.

    Appends happen in a single synchronous step, so under asyncio no reader
    can observe a partially appended batch. Readers get an immutable snapshot.
    """

    def __init__(self):
        self._chunks: List[Chunk] = []
        self._ids: Dict[str, int] = {}

    def append_many(self, chunks: Sequence[Chunk]) -> None:
        """
        Append a batch of chunks, preserving their order.

        Args:
            chunks: Chunks to append

        Raises:
            ValueError: If a chunk id is already indexed or repeated in the batch;
                nothing from the batch is appended in that case
        """
        seen = set()
        for chunk in chunks:
            if chunk.chunk_id in self._ids or chunk.chunk_id in seen:
                raise ValueError(f"Duplicate chunk id: {chunk.chunk_id}")
            seen.add(chunk.chunk_id)

        start = len(self._chunks)
        self._chunks.extend(chunks)
        for offset, chunk in enumerate(chunks):
            self._ids[chunk.chunk_id] = start + offset

        logger.debug(f"Indexed {len(chunks)} chunks (total {len(self._chunks)})")

    def snapshot(self) -> Tuple[Chunk, ...]:
        """Return every indexed chunk in insertion order."""
        return tuple(self._chunks)

    def for_document(self, doc_id: str) -> List[Chunk]:
        """Return the chunks of one document in slice order."""
        return [chunk for chunk in self._chunks if chunk.doc_id == doc_id]

    def get(self, chunk_id: str) -> Chunk:
        """
        Look up a chunk by id.

        Raises:
            KeyError: If the id is not indexed
        """
        return self._chunks[self._ids[chunk_id]]

    def clear(self) -> None:
        """Drop every chunk (session reset)."""
        self._chunks = []
        self._ids = {}
        logger.info("Cleared index store")

    def __len__(self) -> int:
        return len(self._chunks)

    def __contains__(self, chunk_id: object) -> bool:
        return chunk_id in self._ids
