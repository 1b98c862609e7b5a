"""Configuration management for the Ops Q&A document service."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173"
).split(",")

# Model Configuration
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-ada-002")
ANSWER_MODEL = os.getenv("ANSWER_MODEL", "gpt-4o")
ANSWER_TEMPERATURE = float(os.getenv("ANSWER_TEMPERATURE", "0.0"))

# Provider endpoints used by the retrieval core. Both default to this
# service's own gateway routes (/api/embed, /api/answer).
EMBED_API_URL = os.getenv("EMBED_API_URL", f"http://localhost:{PORT}/api/embed")
ANSWER_API_URL = os.getenv("ANSWER_API_URL", f"http://localhost:{PORT}/api/answer")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# Chunking Configuration
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "500"))  # characters
EMBED_CONCURRENCY = int(os.getenv("EMBED_CONCURRENCY", "4"))

# Retrieval Configuration
TOP_K = int(os.getenv("TOP_K", "5"))
CONTEXT_SEPARATOR = os.getenv("CONTEXT_SEPARATOR", "\n---\n")

# Upload / session
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "50"))
PRELOAD_PATH = os.getenv("PRELOAD_PATH")

FALLBACK_ANSWER = "Sorry, I was unable to generate an answer at this time."

SYSTEM_PROMPT = (
    "You are a helpful AI assistant for a restaurant franchise. Use the provided "
    "context from the operations manual to answer the user's question. If the "
    "context does not contain the answer, say you do not know."
)

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
