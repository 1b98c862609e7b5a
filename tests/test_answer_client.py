"""Unit tests for AnswerClient."""
import sys
import asyncio
import json
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import httpx
import pytest
from services.answer_client import AnswerClient, GenerationResult
from config import FALLBACK_ANSWER

API_URL = "http://provider.test/api/answer"


def client_for(handler):
    """Create an AnswerClient whose requests are served by ``handler``."""
    return AnswerClient(api_url=API_URL, transport=httpx.MockTransport(handler))


class TestAnswerClient:
    """Test suite for AnswerClient."""

    def test_fallback_constant(self):
        """Test the fixed apology text."""
        assert FALLBACK_ANSWER == "Sorry, I was unable to generate an answer at this time."

    def test_generate_success(self):
        """Test a successful generation request."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"answer": "Lock the back door first."})

        result = asyncio.run(client_for(handler).generate("ctx A\n---\nctx B", "How do I close?"))

        assert isinstance(result, GenerationResult)
        assert result.text == "Lock the back door first."
        assert result.generated is True
        assert result.latency_ms >= 0
        assert json.loads(requests[0].content) == {
            "context": "ctx A\n---\nctx B",
            "question": "How do I close?"
        }

    def test_generate_empty_answer_is_passed_through(self):
        """Test that an empty answer string is a valid answer."""
        result = asyncio.run(client_for(lambda r: httpx.Response(200, json={"answer": ""})).generate("", "q"))

        assert result.text == ""
        assert result.generated is True

    @pytest.mark.parametrize("status", [400, 429, 500, 503])
    def test_generate_error_status_falls_back(self, status):
        """Test that non-success statuses yield the fallback answer."""
        result = asyncio.run(client_for(lambda r: httpx.Response(status)).generate("ctx", "q"))

        assert result.text == FALLBACK_ANSWER
        assert result.generated is False

    def test_generate_network_error_falls_back(self):
        """Test that a network failure yields the fallback answer."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = asyncio.run(client_for(handler).generate("ctx", "q"))

        assert result.text == FALLBACK_ANSWER
        assert result.generated is False

    def test_generate_timeout_falls_back(self):
        """Test that a timeout yields the fallback answer."""
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        result = asyncio.run(client_for(handler).generate("ctx", "q"))

        assert result.text == FALLBACK_ANSWER

    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"text": "wrong key"}),
        httpx.Response(200, json={"answer": 42}),
        httpx.Response(200, json=["answer"]),
    ])
    def test_generate_malformed_response_falls_back(self, response):
        """Test that malformed bodies yield the fallback answer."""
        result = asyncio.run(client_for(lambda r: response).generate("ctx", "q"))

        assert result.text == FALLBACK_ANSWER
        assert result.generated is False

    def test_custom_fallback(self):
        """Test overriding the fallback text."""
        client = AnswerClient(
            api_url=API_URL,
            fallback_answer="unavailable",
            transport=httpx.MockTransport(lambda r: httpx.Response(500))
        )
        assert asyncio.run(client.generate("", "q")).text == "unavailable"
