"""Document data models."""
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ExtractionResult:
    """Text and page count returned by the extraction collaborator."""
    text: str
    pages: int


@dataclass(frozen=True)
class Document:
    """Represents an uploaded document and its extracted text."""
    doc_id: str
    name: str
    pages: int  # 0 when extraction failed
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls(
            doc_id=data["doc_id"],
            name=data["name"],
            pages=int(data.get("pages", 0)),
            text=data.get("text", ""),
        )
