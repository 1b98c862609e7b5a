"""Embedding provider client with graceful degradation."""
import asyncio
import logging
import math
import numbers
import time
from typing import List, Optional, Sequence

import httpx

from models.embedding import EmbeddingResult
from config import EMBED_API_URL, EMBED_CONCURRENCY, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Client for an embedding provider speaking ``{input}`` -> ``{embedding}``."""

    def __init__(
        self,
        api_url: str = EMBED_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        concurrency: int = EMBED_CONCURRENCY,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the embedding client.

        Args:
            api_url: Provider endpoint accepting POST ``{"input": text}``
            timeout: Request timeout in seconds
            concurrency: Maximum in-flight requests for ``embed_many``
            transport: Optional httpx transport (used to stub the provider)
        """
        if concurrency <= 0:
            raise ValueError("concurrency must be positive")

        self.api_url = api_url
        self.timeout = timeout
        self.concurrency = concurrency
        self.transport = transport

        logger.info(f"Initialized EmbeddingClient for {api_url}")

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Request an embedding for a single text span.

        Every failure (network error, timeout, non-success status, malformed
        body) is reported as ``EmbeddingResult.unavailable``; nothing is raised.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult carrying the vector or the reason it is unavailable
        """
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json={"input": text})
        except httpx.TimeoutException:
            return self._unavailable(f"request timeout after {self.timeout}s")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._unavailable(f"network error: {e}")

        if not response.is_success:
            return self._unavailable(f"provider returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            return self._unavailable("response body is not JSON")

        vector = data.get("embedding") if isinstance(data, dict) else None
        if not is_numeric_vector(vector):
            return self._unavailable("response has no finite numeric 'embedding' list")

        elapsed = time.time() - start_time
        logger.debug(f"Embedded {len(text)} chars into {len(vector)} dims in {elapsed:.2f}s")
        return EmbeddingResult.of(vector)

    async def embed_many(self, texts: Sequence[str]) -> List[EmbeddingResult]:
        """
        Embed many spans with at most ``concurrency`` requests in flight.

        Results are returned in the order of ``texts`` regardless of the order
        in which requests complete.

        Args:
            texts: Text spans to embed

        Returns:
            One EmbeddingResult per input, in input order
        """
        if not texts:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(text: str) -> EmbeddingResult:
            async with semaphore:
                return await self.embed(text)

        results = await asyncio.gather(*(bounded(text) for text in texts))

        unavailable = sum(1 for result in results if not result.available)
        if unavailable:
            logger.warning(f"{unavailable}/{len(texts)} chunk embeddings unavailable")
        return list(results)

    @staticmethod
    def _unavailable(reason: str) -> EmbeddingResult:
        logger.warning(f"Embedding unavailable: {reason}")
        return EmbeddingResult.unavailable(reason)


def is_numeric_vector(value) -> bool:
    """True for a list of finite real numbers (bools excluded); ``[]`` qualifies."""
    if not isinstance(value, list):
        return False
    return all(
        isinstance(x, numbers.Real) and not isinstance(x, bool) and math.isfinite(x)
        for x in value
    )
