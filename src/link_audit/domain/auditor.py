from collections.abc import Collection, Iterable, Mapping

from src.config.logger_config import logger
from src.link_audit.domain.entities import BrokenLinkFinding, ContentDocument, FixOutcome, LinkClassification
from src.link_audit.domain.extraction import extract_links, rewrite_links
from src.link_audit.domain.rules import BROKEN_LINK_KEYWORDS
from src.redirects.domain.errors import InvalidPatternError
from src.redirects.domain.resolver import CanonicalResolver
from src.redirects.domain.rule_table import RedirectRuleTable


def chained_fix_targets(fixes: Mapping[str, str]) -> list[str]:
    """Broken URLs whose replacement is itself a broken URL.

    A non-empty result means a second fix pass would rewrite links again.
    """
    return sorted(source for source, target in fixes.items() if target in fixes)


class LinkAuditor:
    """Finds internal links to known-broken paths and rewrites them.

    ``fixes`` must be an exact-match table keyed by internal path. Any anchor
    whose href reduces to such a path is rewritten, whatever its origin,
    query or attribute spelling. Suggestions are run through ``resolver`` when one
    is given so that a fix never lands on a redirecting path.
    """

    def __init__(
        self,
        fixes: RedirectRuleTable,
        site_origins: Iterable[str],
        fallback_page: str,
        keywords: Iterable[str] = BROKEN_LINK_KEYWORDS,
        resolver: CanonicalResolver | None = None,
    ) -> None:
        if not fixes.is_exact:
            raise InvalidPatternError(fixes.non_exact_sources()[0], "broken-link fixes must be exact paths")
        self.site_origins = tuple(origin.rstrip("/") for origin in site_origins)
        self.fallback_page = fallback_page
        self.keywords = tuple(k.lower() for k in keywords)
        self.resolver = resolver
        self._suggestions: dict[str, str] = {}
        for rule in fixes:
            self._suggestions.setdefault(rule.source_pattern, self._final_destination(rule.destination))

    @property
    def suggestions(self) -> dict[str, str]:
        return dict(self._suggestions)

    def chained_targets(self) -> list[str]:
        return chained_fix_targets(self._suggestions)

    def classify(self, path: str) -> tuple[LinkClassification, str] | None:
        suggested = self._suggestions.get(path)
        if suggested is not None:
            return "redirected", suggested
        lowered = path.lower()
        if any(keyword in lowered for keyword in self.keywords):
            return "missing", self.fallback_page
        return None

    def scan_document(self, document: ContentDocument) -> list[BrokenLinkFinding]:
        findings: list[BrokenLinkFinding] = []
        for link in extract_links(document.body, self.site_origins):
            verdict = self.classify(link.path)
            if verdict is None:
                continue
            classification, suggested = verdict
            findings.append(
                BrokenLinkFinding(
                    source_document_id=document.id,
                    source_title=document.title,
                    source_url=document.source_url,
                    target_url=link.path,
                    original_url=link.url,
                    link_text=link.link_text,
                    suggested_fix=suggested,
                    classification=classification,
                )
            )
        return findings

    def scan(self, corpus: Iterable[ContentDocument]) -> list[BrokenLinkFinding]:
        findings: list[BrokenLinkFinding] = []
        for document in corpus:
            findings.extend(self.scan_document(document))
        return findings

    def apply_fix(self, body: str, broken_urls: Collection[str] | None = None) -> tuple[str, int]:
        """Rewrite every anchor that points at a known-broken path; returns the new body and replacement count."""

        def target_for(path: str) -> str | None:
            if broken_urls is not None and path not in broken_urls:
                return None
            return self._suggestions.get(path)

        return rewrite_links(body, self.site_origins, target_for)

    def fix_document(self, document: ContentDocument, broken_urls: Collection[str] | None = None) -> FixOutcome:
        new_body, replaced = self.apply_fix(document.body or "", broken_urls)
        if new_body == (document.body or ""):
            return FixOutcome(document_id=document.id, changed=False)
        logger.debug("Links rewritten: document_id={}, replacements={}", document.id, replaced)
        return FixOutcome(document_id=document.id, changed=True, new_body=new_body, replacements=replaced)

    def fix(
        self,
        corpus: Iterable[ContentDocument],
        findings: Iterable[BrokenLinkFinding] | None = None,
    ) -> list[FixOutcome]:
        targets_by_document: dict[int | str, set[str]] | None = None
        if findings is not None:
            targets_by_document = {}
            for finding in findings:
                if finding.fixable:
                    targets_by_document.setdefault(finding.source_document_id, set()).add(finding.target_url)

        outcomes: list[FixOutcome] = []
        for document in corpus:
            broken_urls = None
            if targets_by_document is not None:
                broken_urls = targets_by_document.get(document.id, set())
            outcomes.append(self.fix_document(document, broken_urls))
        return outcomes

    def _final_destination(self, destination: str) -> str:
        if self.resolver is None:
            return destination
        return self.resolver.canonical_path(destination)

