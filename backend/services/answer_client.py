"""Generation provider client returning grounded answers."""
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from config import ANSWER_API_URL, FALLBACK_ANSWER, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Answer text from the generation provider."""
    text: str
    generated: bool  # False when FALLBACK_ANSWER was substituted
    latency_ms: int


class AnswerClient:
    """Client for a generation provider speaking ``{context, question}`` -> ``{answer}``.

    The provider is responsible for the system directive that keeps answers
    grounded in the supplied context.
    """

    def __init__(
        self,
        api_url: str = ANSWER_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        fallback_answer: str = FALLBACK_ANSWER,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.fallback_answer = fallback_answer
        self.transport = transport

        logger.info(f"Initialized AnswerClient for {api_url}")

    async def generate(self, context: str, question: str) -> GenerationResult:
        """
        Request an answer to ``question`` grounded in ``context``.

        Never raises: any network error, non-success status or malformed
        response yields the fallback answer with ``generated=False``.

        Args:
            context: Assembled context from the top-ranked chunks
            question: The operator's question, already trimmed

        Returns:
            GenerationResult with the answer text and latency
        """
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json={"context": context, "question": question}
                )
        except httpx.TimeoutException:
            return self._fallback(start_time, f"request timeout after {self.timeout}s")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._fallback(start_time, f"network error: {e}")

        if not response.is_success:
            return self._fallback(start_time, f"provider returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            return self._fallback(start_time, "response body is not JSON")

        answer = data.get("answer") if isinstance(data, dict) else None
        if not isinstance(answer, str):
            return self._fallback(start_time, "response has no 'answer' string")

        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Generated answer: chars={len(answer)}, latency={latency_ms}ms")
        return GenerationResult(text=answer, generated=True, latency_ms=latency_ms)

    def _fallback(self, start_time: float, reason: str) -> GenerationResult:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.warning(f"Answer unavailable ({reason}); using fallback answer")
        return GenerationResult(text=self.fallback_answer, generated=False, latency_ms=latency_ms)
