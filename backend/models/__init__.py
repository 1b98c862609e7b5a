"""Data models for the Ops Q&A document service."""
from .document import Document, ExtractionResult
from .chunk import Chunk, ScoredChunk
from .embedding import EmbeddingResult
from .answer import Answer
from .api import (
    AskRequest,
    AskResponse,
    Source,
    DocumentSummary,
    IngestResponse,
    EmbedRequest,
    EmbedResponse,
    AnswerRequest,
    AnswerResponse,
)

__all__ = [
    "Document",
    "ExtractionResult",
    "Chunk",
    "ScoredChunk",
    "EmbeddingResult",
    "Answer",
    "AskRequest",
    "AskResponse",
    "Source",
    "DocumentSummary",
    "IngestResponse",
    "EmbedRequest",
    "EmbedResponse",
    "AnswerRequest",
    "AnswerResponse",
]
