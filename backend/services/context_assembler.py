"""Context assembly for the generation prompt."""
from typing import Sequence

from models.chunk import ScoredChunk
from config import CONTEXT_SEPARATOR


def assemble_context(scored_chunks: Sequence[ScoredChunk], separator: str = CONTEXT_SEPARATOR) -> str:
    """Join chunk texts in rank order with ``separator``."""
    return separator.join(scored.chunk.text for scored in scored_chunks)
