"""Services for the Ops Q&A document service."""
from .tokenizer import tokenize
from .similarity import cosine_similarity, token_overlap_score
from .document_loader import DocumentLoader
from .chunking_engine import ChunkingEngine
from .embedding_client import EmbeddingClient
from .index_store import IndexStore
from .retrieval_engine import RetrievalEngine
from .context_assembler import assemble_context
from .answer_client import AnswerClient, GenerationResult
from .openai_gateway import OpenAIGateway, ProviderError, ProviderClientError
from .session import QASession

__all__ = ['tokenize', 'cosine_similarity', 'token_overlap_score', 'DocumentLoader', 'ChunkingEngine', 'EmbeddingClient', 'IndexStore', 'RetrievalEngine', 'assemble_context', 'AnswerClient', 'GenerationResult', 'OpenAIGateway', 'ProviderError', 'ProviderClientError', 'QASession']
