"""Retrieval engine for scoring and ranking indexed chunks."""
import logging
from typing import List, Sequence

from models.chunk import Chunk, ScoredChunk
from models.embedding import EmbeddingResult
from services.similarity import cosine_similarity, token_overlap_score
from services.tokenizer import tokenize
from config import TOP_K

logger = logging.getLogger(__name__)


class RetrievalEngine:
    """Rank chunks by vector similarity, or by keyword overlap when no query vector exists."""

    def __init__(self, top_k: int = TOP_K):
        """
        Initialize the retrieval engine.

        Args:
            top_k: Number of chunks kept after ranking (default: 5)
        """
        if top_k <= 0:
            raise ValueError("top_k must be positive")

        self.top_k = top_k
        logger.info(f"Initialized RetrievalEngine (top_k={top_k})")

    def score(
        self,
        chunks: Sequence[Chunk],
        question: str,
        query_embedding: EmbeddingResult
    ) -> List[ScoredChunk]:
        """
        Score every chunk against the query, in index order.

        Vector path (query embedding available): cosine similarity between the
        query vector and each chunk embedding; a chunk without an embedding is
        scored against the zero vector and gets 0.

        Fallback path (query embedding unavailable): number of query tokens,
        repeats included, that appear anywhere in the chunk text.

        Args:
            chunks: Indexed chunks
            question: Raw question text
            query_embedding: Result of embedding the question

        Returns:
            One ScoredChunk per input chunk, unsorted
        """
        if query_embedding.available:
            query_vector = query_embedding.vector
            return [
                ScoredChunk(chunk=chunk, score=cosine_similarity(query_vector, chunk.embedding or ()))
                for chunk in chunks
            ]

        logger.info(
            f"Query embedding unavailable ({query_embedding.reason}); using keyword overlap"
        )
        query_tokens = tokenize(question)
        return [
            ScoredChunk(chunk=chunk, score=token_overlap_score(query_tokens, tokenize(chunk.text)))
            for chunk in chunks
        ]

    def rank(
        self,
        chunks: Sequence[Chunk],
        question: str,
        query_embedding: EmbeddingResult
    ) -> List[ScoredChunk]:
        """
        Return the top-k chunks, highest score first.

        The sort is stable, so chunks with equal scores keep their insertion
        order.

        Args:
            chunks: Indexed chunks
            question: Raw question text
            query_embedding: Result of embedding the question

        Returns:
            At most ``top_k`` scored chunks
        """
        scored = self.score(chunks, question, query_embedding)
        ranked = sorted(scored, key=lambda item: item.score, reverse=True)[:self.top_k]

        if ranked:
            logger.info(
                f"Ranked {len(scored)} chunks, kept {len(ranked)} "
                f"(top score: {ranked[0].score:.3f})"
            )
        else:
            logger.info("No chunks indexed; nothing to rank")
        return ranked
