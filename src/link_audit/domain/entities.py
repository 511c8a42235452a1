from dataclasses import dataclass
from typing import Any, Literal

LinkClassification = Literal["missing", "redirected"]


@dataclass(frozen=True)
class ContentDocument:
    id: int | str
    title: str
    body: str
    slug: str | None = None

    @property
    def source_url(self) -> str:
        if self.slug:
            return f"/{self.slug.lstrip('/')}"
        return f"/{self.id}"


@dataclass(frozen=True)
class ExtractedLink:
    url: str
    link_text: str
    path: str


@dataclass(frozen=True)
class BrokenLinkFinding:
    source_document_id: int | str
    source_title: str
    source_url: str
    target_url: str
    original_url: str
    link_text: str
    suggested_fix: str | None
    classification: LinkClassification

    @property
    def fixable(self) -> bool:
        return self.classification == "redirected" and self.suggested_fix is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_document_id": self.source_document_id,
            "source_title": self.source_title,
            "source_url": self.source_url,
            "target_url": self.target_url,
            "original_url": self.original_url,
            "link_text": self.link_text,
            "suggested_fix": self.suggested_fix,
            "classification": self.classification,
        }


@dataclass(frozen=True)
class FixOutcome:
    document_id: int | str
    changed: bool
    new_body: str | None = None
    error: str | None = None
    replacements: int = 0

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "document_id": self.document_id,
            "changed": self.changed,
            "replacements": self.replacements,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload
