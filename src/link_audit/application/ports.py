from typing import Any, Protocol, Sequence, runtime_checkable

from src.link_audit.domain.entities import ContentDocument


@runtime_checkable
class ContentRepositoryPort(Protocol):
    def list_published_documents(self) -> Sequence[ContentDocument]: ...
    """Return every published document with its current body."""

    def update_document_body(self, document_id: int | str, new_body: str) -> None: ...
    """Persist a rewritten body for one document."""


@runtime_checkable
class LinkReportSinkPort(Protocol):
    def write_report(self, name: str, payload: dict[str, Any]) -> str: ...
    """Persist one report and return where it was written."""
