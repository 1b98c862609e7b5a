"""Main entry point for the Ops Q&A document service API."""
import logging
import os
import re
from typing import List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from config import CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL, MAX_UPLOAD_MB, PORT, PRELOAD_PATH
from logger import setup_logging
from models.answer import Answer
from models.api import (
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
from models.document import Document
from services.answer_client import AnswerClient
from services.embedding_client import EmbeddingClient
from services.openai_gateway import OpenAIGateway, ProviderClientError
from services.session import QASession

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Ops Q&A",
    description="Question answering over uploaded operations documents",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (will be done on startup)
session: QASession = None
gateway: OpenAIGateway = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global session, gateway

    if LOG_FORMAT == "json":
        setup_logging(LOG_LEVEL)

    logger.info("Initializing Ops Q&A services...")

    try:
        gateway = OpenAIGateway()
        session = QASession(
            embedding_client=EmbeddingClient(),
            answer_client=AnswerClient()
        )

        if PRELOAD_PATH:
            if os.path.exists(PRELOAD_PATH):
                session.load_snapshot_file(PRELOAD_PATH)
            else:
                logger.warning(f"Preload snapshot not found: {PRELOAD_PATH}")

        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Ops Q&A API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "ops-qa",
        "version": "1.0.0",
        "documents": len(session.documents) if session else 0,
        "chunks": len(session.index) if session else 0
    }


@app.post("/documents", response_model=IngestResponse)
async def upload_documents(files: List[UploadFile] = File(...)) -> IngestResponse:
    """
    Ingest one or more uploaded documents.

    Files are ingested one after another; each is extracted, chunked, embedded
    and appended to the index. A file that cannot be parsed becomes an empty
    document with 0 pages.

    Raises:
        HTTPException: 413 if any file exceeds MAX_UPLOAD_MB
    """
    max_bytes = MAX_UPLOAD_MB * 1024 * 1024
    payloads = []
    for upload in files:
        payload = await upload.read()
        if len(payload) > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File '{upload.filename}' exceeds {MAX_UPLOAD_MB}MB limit"
            )
        payloads.append((upload.filename or "document.pdf", payload))

    try:
        documents = [await session.ingest(name, payload) for name, payload in payloads]
    except Exception as e:
        logger.error(f"Unexpected error ingesting documents: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    summaries = [_summarize(document) for document in documents]
    return IngestResponse(
        documents=summaries,
        total_chunks=sum(summary.chunks for summary in summaries)
    )


@app.get("/documents", response_model=List[DocumentSummary])
async def list_documents() -> List[DocumentSummary]:
    """List ingested documents in upload order."""
    return [_summarize(document) for document in session.documents]


@app.get("/documents/{doc_id}/text")
async def download_document_text(doc_id: str) -> PlainTextResponse:
    """Download the extracted text of a document as a .txt attachment."""
    document = session.get_document(doc_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")

    filename = re.sub(r"\.[^/.]+$", "", document.name) + ".txt"
    return PlainTextResponse(
        document.text,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@app.post("/ask", response_model=AskResponse, responses={204: {"description": "Blank question"}})
async def ask_endpoint(request: AskRequest):
    """
    Answer a question from the indexed documents.

    Blank questions are ignored: no provider is called, the stored answer is
    left unchanged and the response is 204 No Content.
    """
    try:
        answer = await session.ask(request.question)
    except Exception as e:
        logger.error(f"Unexpected error processing question: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    if answer is None:
        return Response(status_code=204)
    return _answer_response(answer)


@app.get("/answer", response_model=AskResponse, responses={204: {"description": "No answer yet"}})
async def last_answer():
    """Return the most recent stored answer."""
    if session.answer is None:
        return Response(status_code=204)
    return _answer_response(session.answer)


@app.delete("/session", status_code=204)
async def reset_session() -> Response:
    """Clear documents, index and answer."""
    session.reset()
    return Response(status_code=204)


@app.get("/session/export")
async def export_session():
    """Export documents and index as a preloadable snapshot."""
    return session.export_snapshot()


@app.post("/api/embed", response_model=EmbedResponse)
async def embed_endpoint(request: Optional[EmbedRequest] = None):
    """Gateway: ``{input}`` -> ``{embedding}`` via the OpenAI embeddings API."""
    text = request.input if request else None
    if not text or not isinstance(text, str):
        return JSONResponse(status_code=400, content={"error": "Missing input"})

    try:
        embedding = await gateway.embed(text)
        response = EmbedResponse(embedding=embedding)
    except ProviderClientError as e:
        return JSONResponse(status_code=e.error.status_code, content={"error": e.error.message})
    except Exception as e:
        logger.error(f"Unexpected error in embed gateway: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e) or "Unexpected error"})
    return response


@app.post("/api/answer", response_model=AnswerResponse)
async def answer_endpoint(request: Optional[AnswerRequest] = None):
    """Gateway: ``{context, question}`` -> ``{answer}`` via the OpenAI chat API."""
    question = request.question if request else None
    if not question:
        return JSONResponse(status_code=400, content={"error": "Missing question"})

    try:
        answer = await gateway.answer(request.context or "", question)
    except ProviderClientError as e:
        return JSONResponse(status_code=e.error.status_code, content={"error": e.error.message})
    except Exception as e:
        logger.error(f"Unexpected error in answer gateway: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e) or "Unexpected error"})
    return AnswerResponse(answer=answer)


def _summarize(document: Document) -> DocumentSummary:
    chunks = session.index.for_document(document.doc_id)
    return DocumentSummary(
        id=document.doc_id,
        name=document.name,
        pages=document.pages,
        chunks=len(chunks),
        embedded_chunks=sum(1 for chunk in chunks if chunk.embedding is not None)
    )


def _answer_response(answer: Answer) -> AskResponse:
    return AskResponse(
        question=answer.question,
        answer=answer.text,
        generated=answer.generated,
        sources=[
            Source(
                chunk_id=scored.chunk.chunk_id,
                document_id=scored.chunk.doc_id,
                document_name=session.document_name(scored.chunk.doc_id),
                text=scored.chunk.text,
                score=scored.score
            )
            for scored in answer.sources
        ]
    )


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Ops Q&A API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
