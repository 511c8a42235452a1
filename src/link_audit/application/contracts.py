from dataclasses import dataclass, field
from typing import Any

from src.link_audit.domain.entities import BrokenLinkFinding


@dataclass(frozen=True)
class LinkHealthSummary:
    total_broken_links: int
    fixable_links: int
    by_classification: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_broken_links": self.total_broken_links,
            "fixable_links": self.fixable_links,
            "by_classification": dict(self.by_classification),
        }


@dataclass(frozen=True)
class LinkHealthScan:
    summary: LinkHealthSummary
    findings: tuple[BrokenLinkFinding, ...]
    documents_scanned: int
    generated_at: str

    def to_dict(self, limit: int | None = None) -> dict[str, Any]:
        findings = self.findings if limit is None else self.findings[:limit]
        return {
            "summary": self.summary.to_dict(),
            "documents_scanned": self.documents_scanned,
            "broken_links": [finding.to_dict() for finding in findings],
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class FixedDocument:
    document_id: int | str
    title: str
    slug: str | None
    replacements: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_id": self.document_id,
            "title": self.title,
            "slug": self.slug,
            "replacements": self.replacements,
        }


@dataclass(frozen=True)
class LinkFixReport:
    success: bool
    blogs_updated: int
    error_count: int
    fixed_links: tuple[FixedDocument, ...]
    errors: tuple[str, ...]
    generated_at: str
    documents_scanned: int = 0
    target_urls: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_processed(self) -> int:
        return self.blogs_updated + self.error_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "summary": {
                "blogs_updated": self.blogs_updated,
                "errors": self.error_count,
                "total_processed": self.total_processed,
            },
            "fixed_links": [fixed.to_dict() for fixed in self.fixed_links],
            "errors": list(self.errors),
            "generated_at": self.generated_at,
        }
