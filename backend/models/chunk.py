"""Chunk data models."""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Chunk:
    """Represents a fixed-size slice of a document's text."""
    chunk_id: str
    doc_id: str
    text: str
    embedding: Optional[Tuple[float, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chunk_id": self.chunk_id,
            "doc_id": self.doc_id,
            "text": self.text,
            "embedding": list(self.embedding) if self.embedding is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chunk":
        embedding = data.get("embedding")
        return cls(
            chunk_id=data["chunk_id"],
            doc_id=data["doc_id"],
            text=data["text"],
            embedding=tuple(float(x) for x in embedding) if embedding is not None else None,
        )


@dataclass(frozen=True)
class ScoredChunk:
    """Chunk with relevance score from ranking."""
    chunk: Chunk
    score: float  # cosine in [-1, 1] or a token-overlap count
