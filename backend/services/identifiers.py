"""Opaque identifier generation for documents and chunks."""
import uuid


def new_id() -> str:
    """Return a random, statistically unique identifier."""
    return uuid.uuid4().hex
