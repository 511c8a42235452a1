from collections import Counter
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timezone
from time import perf_counter

from tqdm import tqdm

from src.config.logger_config import logger
from src.link_audit.application.contracts import FixedDocument, LinkFixReport, LinkHealthScan, LinkHealthSummary
from src.link_audit.application.ports import ContentRepositoryPort
from src.link_audit.domain.auditor import LinkAuditor
from src.link_audit.domain.entities import BrokenLinkFinding, FixOutcome

MAX_REPORTED_ERRORS = 10


class LinkHealthService:
    """Scan and fix passes over the published corpus.

    Rewrites are computed for the whole corpus before any write; only
    documents whose body changed are written back.
    """

    def __init__(self, repository: ContentRepositoryPort, auditor: LinkAuditor, show_progress: bool = False) -> None:
        self.repository = repository
        self.auditor = auditor
        self.show_progress = show_progress

    def scan_for_broken_links(self) -> LinkHealthScan:
        started = perf_counter()
        documents = list(self.repository.list_published_documents())
        findings: list[BrokenLinkFinding] = []
        for document in tqdm(
            documents,
            total=len(documents),
            desc="Link scan",
            unit="doc",
            leave=True,
            disable=not self.show_progress,
        ):
            findings.extend(self.auditor.scan_document(document))

        scan = LinkHealthScan(
            summary=self._summarize(findings),
            findings=tuple(findings),
            documents_scanned=len(documents),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "Link scan completed: documents_scanned={}, total_broken_links={}, fixable_links={}, by_classification={}, duration_ms={}",
            scan.documents_scanned,
            scan.summary.total_broken_links,
            scan.summary.fixable_links,
            scan.summary.by_classification,
            int((perf_counter() - started) * 1000),
        )
        return scan

    def fix_broken_links(self, target_urls: Iterable[str] | None = None) -> LinkFixReport:
        started = perf_counter()
        documents = list(self.repository.list_published_documents())
        targets = tuple(sorted(set(target_urls))) if target_urls is not None else ()

        findings = None
        if target_urls is not None:
            wanted = set(targets)
            findings = [finding for finding in self.auditor.scan(documents) if finding.target_url in wanted]
        outcomes = self.auditor.fix(documents, findings)
        by_id = {document.id: document for document in documents}

        fixed_links: list[FixedDocument] = []
        errors: list[str] = []
        error_count = 0
        for outcome in tqdm(
            outcomes,
            total=len(outcomes),
            desc="Link fix",
            unit="doc",
            leave=True,
            disable=not self.show_progress,
        ):
            if not outcome.changed:
                continue
            document = by_id[outcome.document_id]
            written = self._write(outcome)
            if written.error is not None:
                error_count += 1
                errors.append(f"Failed to update {document.title}: {written.error}")
                continue
            fixed_links.append(
                FixedDocument(
                    document_id=document.id,
                    title=document.title,
                    slug=document.slug,
                    replacements=outcome.replacements,
                )
            )

        report = LinkFixReport(
            success=True,
            blogs_updated=len(fixed_links),
            error_count=error_count,
            fixed_links=tuple(fixed_links),
            errors=tuple(errors[:MAX_REPORTED_ERRORS]),
            generated_at=datetime.now(timezone.utc).isoformat(),
            documents_scanned=len(documents),
            target_urls=targets,
        )
        logger.info(
            "Link fix completed: documents_scanned={}, blogs_updated={}, errors={}, target_urls={}, duration_ms={}",
            report.documents_scanned,
            report.blogs_updated,
            report.error_count,
            list(report.target_urls),
            int((perf_counter() - started) * 1000),
        )
        return report

    def _write(self, outcome: FixOutcome) -> FixOutcome:
        try:
            self.repository.update_document_body(outcome.document_id, outcome.new_body or "")
        except Exception as exc:
            logger.error("Document update failed: document_id={}, error={}", outcome.document_id, exc)
            return replace(outcome, error=f"{type(exc).__name__}: {exc}")
        return outcome

    @staticmethod
    def _summarize(findings: list[BrokenLinkFinding]) -> LinkHealthSummary:
        counts = Counter(finding.classification for finding in findings)
        return LinkHealthSummary(
            total_broken_links=len(findings),
            fixable_links=sum(1 for finding in findings if finding.fixable),
            by_classification={"missing": counts.get("missing", 0), "redirected": counts.get("redirected", 0)},
        )
