"""Embedding result type."""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class EmbeddingResult:
    """Either an embedding vector or an explicit "unavailable" marker.

    Callers branch on ``available`` instead of checking for ``None`` so the
    degraded path stays visible at every call site.
    """
    vector: Optional[Tuple[float, ...]] = None
    reason: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.vector is not None

    @classmethod
    def of(cls, vector) -> "EmbeddingResult":
        return cls(vector=tuple(float(x) for x in vector))

    @classmethod
    def unavailable(cls, reason: str) -> "EmbeddingResult":
        return cls(vector=None, reason=reason)
