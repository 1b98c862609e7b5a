"""
Document ingestion script for the Ops Q&A service.

This script:
1. Loads all PDFs from a directory
2. Extracts and chunks their text
3. Requests an embedding for every chunk from the embedding provider
4. Writes a snapshot JSON that the API can preload via PRELOAD_PATH

Usage:
    python ingest_documents.py --docs ops_docs --output preload.json
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from services.answer_client import AnswerClient
from services.document_loader import DocumentLoader
from services.embedding_client import EmbeddingClient
from services.session import QASession
from config import EMBED_API_URL

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def build_snapshot(docs_directory: str, embed_url: str) -> dict:
    """
    Ingest every PDF in a directory into a fresh session and export it.

    Args:
        docs_directory: Directory containing PDF files
        embed_url: Embedding provider endpoint

    Returns:
        Snapshot dictionary with "docs" and "index"
    """
    loader = DocumentLoader()
    session = QASession(
        embedding_client=EmbeddingClient(api_url=embed_url),
        answer_client=AnswerClient(),
        document_loader=loader
    )

    for filename, payload in loader.load_directory(docs_directory):
        document = await session.ingest(filename, payload)
        logger.info(f"  -> {document.name}: {document.pages} pages")

    return session.export_snapshot()


def main() -> int:
    parser = argparse.ArgumentParser(description="Build a preload snapshot from a directory of PDFs")
    parser.add_argument("--docs", default="ops_docs", help="Directory containing PDF files")
    parser.add_argument("--output", default="preload.json", help="Snapshot file to write")
    parser.add_argument("--embed-url", default=EMBED_API_URL, help="Embedding provider endpoint")
    args = parser.parse_args()

    logger.info("=" * 60)
    logger.info("Ops Q&A - Document Ingestion")
    logger.info("=" * 60)

    snapshot = asyncio.run(build_snapshot(args.docs, args.embed_url))

    if not snapshot["docs"]:
        logger.error(f"No documents ingested from {args.docs}")
        return 1

    with open(args.output, "w", encoding="utf-8") as handle:
        json.dump(snapshot, handle)

    embedded = sum(1 for chunk in snapshot["index"] if chunk["embedding"] is not None)
    logger.info(
        f"Wrote {args.output}: {len(snapshot['docs'])} documents, "
        f"{len(snapshot['index'])} chunks ({embedded} embedded)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
