from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from urllib.parse import urlsplit

from src.config.logger_config import logger
from src.config.settings import CONTENT_DB_PATH, FALLBACK_PAGE, REPORT_DIR, SITE_BASE_URL, SITE_ORIGINS
from src.link_audit.application.contracts import LinkFixReport, LinkHealthScan
from src.link_audit.application.use_cases.link_health import LinkHealthService
from src.link_audit.domain.auditor import LinkAuditor
from src.link_audit.domain.rules import BROKEN_LINK_FIXES
from src.link_audit.infrastructure.content_sqlite import SQLiteContentRepository
from src.link_audit.infrastructure.report_sink import JsonReportSink
from src.redirects.canonical import default_resolver
from src.redirects.domain.resolver import CanonicalResolver
from src.redirects.domain.rule_table import RedirectRuleTable


def build_link_auditor(
    fixes: Mapping[str, str] = BROKEN_LINK_FIXES,
    site_origins: Iterable[str] = SITE_ORIGINS,
    fallback_page: str = FALLBACK_PAGE,
    resolver: CanonicalResolver | None = default_resolver,
) -> LinkAuditor:
    return LinkAuditor(
        fixes=RedirectRuleTable.from_mapping(fixes),
        site_origins=site_origins,
        fallback_page=fallback_page,
        resolver=resolver,
    )


def run_link_audit(
    enable_fix: bool = False,
    db_path: str = CONTENT_DB_PATH,
    report_dir: str | None = REPORT_DIR,
    target_urls: list[str] | None = None,
    show_progress: bool = True,
) -> tuple[LinkHealthScan, LinkFixReport | None]:
    repository = SQLiteContentRepository(db_path)
    service = LinkHealthService(repository=repository, auditor=build_link_auditor(), show_progress=show_progress)
    try:
        scan = service.scan_for_broken_links()
        fix_report = service.fix_broken_links(target_urls) if enable_fix else None
    finally:
        repository.close()

    if not enable_fix:
        logger.info("Link fix is disabled. Set enable_fix=True to rewrite broken links.")

    if report_dir:
        sink = JsonReportSink(report_dir)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        host = urlsplit(SITE_BASE_URL).hostname or "site"
        payload = {"scan": scan.to_dict()}
        if fix_report is not None:
            payload["fix"] = fix_report.to_dict()
        sink.write_report(f"link_health_{host}_{stamp}", payload)
    return scan, fix_report
