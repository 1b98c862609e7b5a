"""Provider gateway forwarding embed/answer requests to the OpenAI REST API."""
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from config import (
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
    EMBEDDING_MODEL,
    ANSWER_MODEL,
    ANSWER_TEMPERATURE,
    REQUEST_TIMEOUT,
    SYSTEM_PROMPT,
)
from services.embedding_client import is_numeric_vector

logger = logging.getLogger(__name__)


@dataclass
class ProviderError:
    """Structured error from provider operations."""
    code: str
    message: str
    status_code: int
    details: Dict[str, Any]


class ProviderClientError(Exception):
    """Exception carrying a ProviderError, translated to an HTTP response by the routes."""

    def __init__(self, error: ProviderError):
        self.error = error
        super().__init__(error.message)


class OpenAIGateway:
    """Thin async client for the OpenAI embeddings and chat completions endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OPENAI_BASE_URL,
        embedding_model: str = EMBEDDING_MODEL,
        answer_model: str = ANSWER_MODEL,
        temperature: float = ANSWER_TEMPERATURE,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the gateway.

        A missing API key is not fatal here: the service can still run with
        keyword fallback, and each gateway call reports the problem instead.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY from environment)
            base_url: API root, e.g. https://api.openai.com/v1
            embedding_model: Model for /embeddings
            answer_model: Model for /chat/completions
            temperature: Sampling temperature for answers
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the upstream API)
        """
        self.api_key = api_key or OPENAI_API_KEY
        self.base_url = base_url.rstrip("/")
        self.embedding_model = embedding_model
        self.answer_model = answer_model
        self.temperature = temperature
        self.timeout = timeout
        self.transport = transport

        if not self.api_key:
            logger.warning("OPENAI_API_KEY is not set; gateway requests will fail")
        logger.info(f"OpenAIGateway initialized for {self.base_url}")

    async def embed(self, text: str) -> List[float]:
        """
        Create an embedding for ``text``.

        Returns:
            The first embedding in the response, or an empty list if absent

        Raises:
            ProviderClientError: On configuration, network or upstream errors,
                or if the embedding is not a list of finite numbers
        """
        path = "/embeddings"
        data = await self._post(
            path,
            {"model": self.embedding_model, "input": text}
        )
        try:
            embedding = data["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError):
            return []
        if not embedding:
            return []

        if not is_numeric_vector(embedding):
            logger.error(f"Malformed response: path={path}, embedding is not a numeric list")
            raise ProviderClientError(ProviderError(
                code="MALFORMED_RESPONSE",
                message="Upstream embedding is not a list of numbers",
                status_code=500,
                details={"path": path}
            ))
        return embedding

    async def answer(self, context: str, question: str) -> str:
        """
        Answer ``question`` using only ``context``.

        Returns:
            The trimmed answer text, or an empty string if absent

        Raises:
            ProviderClientError: On configuration, network or upstream errors
        """
        messages = self.build_messages(context, question)
        data = await self._post(
            "/chat/completions",
            {
                "model": self.answer_model,
                "messages": messages,
                "temperature": self.temperature
            }
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        return content.strip() if isinstance(content, str) else ""

    @staticmethod
    def build_messages(context: str, question: str) -> List[Dict[str, str]]:
        """Build the system + user messages for a grounded answer."""
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"{context}\n\nQuestion: {question}"}
        ]

    async def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        if not self.api_key:
            raise ProviderClientError(ProviderError(
                code="CONFIGURATION_ERROR",
                message="OPENAI_API_KEY is not configured",
                status_code=500,
                details={"path": path}
            ))

        start_time = time.time()
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(f"{self.base_url}{path}", headers=headers, json=payload)
        except httpx.TimeoutException as e:
            error = ProviderError(
                code="TIMEOUT_ERROR",
                message=f"Request timed out after {self.timeout}s",
                status_code=504,
                details={"path": path, "original_error": str(e)}
            )
            logger.error(f"Timeout error: path={path}, error={e}")
            raise ProviderClientError(error)
        except httpx.HTTPError as e:
            error = ProviderError(
                code="NETWORK_ERROR",
                message=f"Network error: {str(e)}",
                status_code=500,
                details={"path": path, "original_error": str(e)}
            )
            logger.error(f"Network error: path={path}, error={e}")
            raise ProviderClientError(error)

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.is_success:
            error = ProviderError(
                code="UPSTREAM_ERROR",
                message=response.text,
                status_code=response.status_code,
                details={"path": path, "latency_ms": latency_ms}
            )
            logger.error(
                f"Upstream error: path={path}, status={response.status_code}, latency={latency_ms}ms",
                extra={"error_code": error.code, "error_details": error.details}
            )
            raise ProviderClientError(error)

        try:
            data = response.json()
        except ValueError as e:
            error = ProviderError(
                code="MALFORMED_RESPONSE",
                message="Upstream response is not JSON",
                status_code=500,
                details={"path": path, "original_error": str(e)}
            )
            logger.error(f"Malformed response: path={path}")
            raise ProviderClientError(error)

        logger.debug(f"Upstream call succeeded: path={path}, latency={latency_ms}ms")
        return data
