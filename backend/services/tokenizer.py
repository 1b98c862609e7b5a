"""Text normalisation for keyword fallback matching."""
import re
from typing import List, Optional

_DELIMITER = re.compile(r"[^a-z0-9]+")


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into lowercase ASCII alphanumeric tokens.

    Any run of other characters is a delimiter. ``None`` or an empty string
    yields an empty list.
    """
    if not text:
        return []
    return [token for token in _DELIMITER.split(text.lower()) if token]
