"""API request/response schemas."""
from typing import Any, List, Optional
from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Question submitted against the indexed documents."""
    question: str = Field(default="", description="Free-text question")


class Source(BaseModel):
    """A ranked chunk that was sent to the generation provider."""
    chunk_id: str
    document_id: str
    document_name: str
    text: str
    score: float


class AskResponse(BaseModel):
    """Answer returned for a question."""
    question: str
    answer: str
    generated: bool
    sources: List[Source]


class DocumentSummary(BaseModel):
    """Document listing entry."""
    id: str
    name: str
    pages: int
    chunks: int
    embedded_chunks: int


class IngestResponse(BaseModel):
    """Documents created by one upload."""
    documents: List[DocumentSummary]
    total_chunks: int


class EmbedRequest(BaseModel):
    """Gateway request body for /api/embed."""
    input: Optional[Any] = None


class EmbedResponse(BaseModel):
    embedding: List[float]


class AnswerRequest(BaseModel):
    """Gateway request body for /api/answer."""
    context: Optional[str] = ""
    question: Optional[str] = None


class AnswerResponse(BaseModel):
    answer: str
