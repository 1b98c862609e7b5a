"""Unit tests for the tokenizer."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from services.tokenizer import tokenize


class TestTokenize:
    """Test suite for tokenize."""

    def test_empty_and_none(self):
        """Test that empty or missing input yields no tokens."""
        assert tokenize("") == []
        assert tokenize(None) == []

    def test_lowercases_and_splits_on_punctuation(self):
        """Test lowercase alphanumeric tokens with punctuation as delimiter."""
        assert tokenize("How do I close the Store?") == ["how", "do", "i", "close", "the", "store"]

    def test_runs_of_delimiters(self):
        """Test that runs of non-alphanumeric characters act as one delimiter."""
        assert tokenize("  step-1 ... step_2\n\nDONE!! ") == ["step", "1", "step", "2", "done"]

    def test_only_delimiters(self):
        """Test input with no alphanumeric characters."""
        assert tokenize("--- !!! ???") == []

    def test_non_ascii_letters_are_delimiters(self):
        """Test that characters outside a-z0-9 split tokens."""
        assert tokenize("café menu") == ["caf", "menu"]

    @pytest.mark.parametrize("text", [
        "Closing Procedure: lock the FRONT door.",
        "Mix 2 cups of flour; bake @ 350F",
        "",
        "ALL-CAPS_and_under_scores",
    ])
    def test_idempotent_on_rejoined_tokens(self, text):
        """Test tokenize(join(tokenize(s))) == tokenize(s)."""
        tokens = tokenize(text)
        assert tokenize(" ".join(tokens)) == tokens
