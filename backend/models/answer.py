"""Answer data models."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from models.chunk import ScoredChunk


@dataclass(frozen=True)
class Answer:
    """Generated answer paired with the ranked chunks sent as context."""
    question: str
    text: str
    sources: List[ScoredChunk]
    generated: bool  # False when the fallback apology was substituted
    created_at: datetime = field(default_factory=datetime.now)
