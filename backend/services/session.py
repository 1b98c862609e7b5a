"""Question-answering session: document set, chunk index and answer slot."""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from models.answer import Answer
from models.chunk import Chunk
from models.document import Document
from services.answer_client import AnswerClient
from services.chunking_engine import ChunkingEngine
from services.context_assembler import assemble_context
from services.document_loader import DocumentLoader
from services.embedding_client import EmbeddingClient
from services.identifiers import new_id
from services.index_store import IndexStore
from services.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)

UNKNOWN_DOCUMENT = "Unknown document"


class QASession:
    """Owns the mutable session state and runs ingestion and asks.

    Documents and the index are append-only from ``ingest`` and read-only from
    ``ask``. The answer slot is last-write-wins by ask start order.
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        answer_client: AnswerClient,
        chunking_engine: Optional[ChunkingEngine] = None,
        retrieval_engine: Optional[RetrievalEngine] = None,
        document_loader: Optional[DocumentLoader] = None,
        index_store: Optional[IndexStore] = None
    ):
        self.embedding_client = embedding_client
        self.answer_client = answer_client
        self.chunking_engine = chunking_engine or ChunkingEngine()
        self.retrieval_engine = retrieval_engine or RetrievalEngine()
        self.document_loader = document_loader or DocumentLoader()
        self.index = index_store or IndexStore()

        self._documents: Dict[str, Document] = {}
        self._answer: Optional[Answer] = None
        self._answer_ticket = 0
        self._last_ticket = 0

    @property
    def documents(self) -> List[Document]:
        """Documents in ingestion order."""
        return list(self._documents.values())

    @property
    def answer(self) -> Optional[Answer]:
        """The most recent answer, if any."""
        return self._answer

    def get_document(self, doc_id: str) -> Optional[Document]:
        return self._documents.get(doc_id)

    def document_name(self, doc_id: str) -> str:
        """Display name for a chunk's owning document."""
        document = self._documents.get(doc_id)
        return document.name if document else UNKNOWN_DOCUMENT

    async def ingest(self, name: str, payload: bytes) -> Document:
        """
        Extract, chunk, embed and index one document.

        Extraction failure produces an empty document with no chunks. Chunk
        embeddings that are unavailable are stored as ``None``.

        Args:
            name: Display name (usually the upload filename)
            payload: Raw document bytes

        Returns:
            The created Document
        """
        extraction = await asyncio.to_thread(self.document_loader.extract, payload, name)
        return await self.ingest_text(name, extraction.text, extraction.pages)

    async def ingest_text(self, name: str, text: str, pages: int = 0) -> Document:
        """
        Chunk, embed and index already-extracted text.

        Args:
            name: Display name
            text: Extracted text (may be empty)
            pages: Page count reported by extraction

        Returns:
            The created Document
        """
        document = Document(doc_id=new_id(), name=name, pages=pages, text=text)

        spans = self.chunking_engine.split_text(text)
        embeddings = await self.embedding_client.embed_many(spans)
        chunks = self.chunking_engine.chunk_document(document, spans, embeddings)

        # No await between these two lines: readers see the whole document or none of it.
        self.index.append_many(chunks)
        self._documents[document.doc_id] = document

        logger.info(
            f"Ingested {name}: {pages} pages, {len(chunks)} chunks, "
            f"{sum(1 for c in chunks if c.embedding is not None)} embedded"
        )
        return document

    async def ask(self, question: str) -> Optional[Answer]:
        """
        Answer a question from the indexed chunks.

        Runs one query embedding attempt, one ranking pass over the whole
        index and one generation request. A blank question is a no-op.

        Args:
            question: Free-text question

        Returns:
            The Answer, or None if the question was blank
        """
        question = (question or "").strip()
        if not question:
            logger.debug("Ignoring blank question")
            return None

        self._last_ticket += 1
        ticket = self._last_ticket
        logger.info(f"Processing question #{ticket}: {question[:100]}")

        query_embedding = await self.embedding_client.embed(question)
        top = self.retrieval_engine.rank(self.index.snapshot(), question, query_embedding)
        context = assemble_context(top)
        result = await self.answer_client.generate(context, question)

        answer = Answer(
            question=question,
            text=result.text,
            sources=top,
            generated=result.generated,
        )

        if ticket > self._answer_ticket:
            self._answer = answer
            self._answer_ticket = ticket
        else:
            logger.info(f"Question #{ticket} superseded by #{self._answer_ticket}; not stored")
        return answer

    def reset(self) -> None:
        """Clear documents, index and answer.

        Asks still in flight when this runs will not store their answers.
        """
        self._documents = {}
        self.index.clear()
        self._answer = None
        self._answer_ticket = self._last_ticket
        logger.info("Session reset")

    def export_snapshot(self) -> Dict[str, Any]:
        """Serialize documents and index as ``{"docs": [...], "index": [...]}``."""
        return {
            "docs": [document.to_dict() for document in self._documents.values()],
            "index": [chunk.to_dict() for chunk in self.index.snapshot()],
        }

    def load_snapshot(self, snapshot: Dict[str, Any]) -> None:
        """
        Append the documents and chunks of a snapshot to this session.

        Raises:
            ValueError: If a chunk id in the snapshot is already indexed
            KeyError: If a record lacks a required field
        """
        documents = [Document.from_dict(item) for item in snapshot.get("docs", [])]
        chunks = [Chunk.from_dict(item) for item in snapshot.get("index", [])]

        self.index.append_many(chunks)
        for document in documents:
            self._documents[document.doc_id] = document

        logger.info(f"Loaded snapshot: {len(documents)} documents, {len(chunks)} chunks")

    def load_snapshot_file(self, path: str) -> None:
        """Load a snapshot previously written by ``export_snapshot``."""
        with open(path, "r", encoding="utf-8") as handle:
            self.load_snapshot(json.load(handle))
