from collections.abc import Iterable
from urllib.parse import urlsplit

from src.config.logger_config import logger
from src.redirects.domain.errors import RedirectLoopError
from src.redirects.domain.models import CanonicalValidation, ResolvedCanonical
from src.redirects.domain.rule_table import RedirectRuleTable

MAX_HOPS = 10


def normalize_path(path: str) -> str:
    """Leading slash added, trailing slashes removed except for the root path."""
    path = (path or "").strip()
    if not path.startswith("/"):
        path = f"/{path}"
    return path.rstrip("/") or "/"


class CanonicalResolver:
    def __init__(self, table: RedirectRuleTable, base_url: str, max_hops: int = MAX_HOPS) -> None:
        if max_hops < 1:
            raise ValueError("max_hops must be at least 1")
        self.table = table
        self.base_url = base_url.rstrip("/")
        self.max_hops = max_hops

    def resolve(self, path: str) -> ResolvedCanonical:
        original = path
        current = normalize_path(path)
        chain = [current]
        hops = 0
        while hops < self.max_hops:
            step = self.table.first_match(current)
            if step is None:
                break
            _rule, destination = step
            current = normalize_path(destination)
            chain.append(current)
            hops += 1

        # Hitting the ceiling is fine only if the last hop landed on a fixed point.
        resolved = hops < self.max_hops or not self.would_redirect(current)
        if not resolved:
            logger.warning(
                "Redirect chain did not settle: path={}, max_hops={}, chain={}",
                original,
                self.max_hops,
                chain,
            )
        return ResolvedCanonical(
            original_path=original,
            final_path=current,
            hops=hops,
            resolved=resolved,
            chain=tuple(chain),
        )

    def would_redirect(self, path: str) -> bool:
        return self.table.first_match(path) is not None

    def redirect_destination(self, path: str) -> str | None:
        step = self.table.first_match(path)
        return step[1] if step else None

    def canonical_path(self, path: str) -> str:
        result = self.resolve(path)
        if not result.resolved:
            raise RedirectLoopError(result.original_path, result.chain, self.max_hops)
        return result.final_path

    def generate_canonical_url(self, path: str, base_url: str | None = None) -> str:
        base = (base_url or self.base_url).rstrip("/")
        return f"{base}{self.canonical_path(path)}"

    def validate_canonical_url(self, url: str) -> CanonicalValidation:
        try:
            parts = urlsplit(url)
        except ValueError:
            parts = None
        if parts is None or parts.scheme not in ("http", "https") or not parts.netloc:
            return CanonicalValidation(url=url, is_valid=False, issue="Invalid canonical URL format")

        path = parts.path or "/"
        normalized = normalize_path(path)
        if not self.would_redirect(normalized):
            if normalized != path:
                return CanonicalValidation(
                    url=url,
                    is_valid=False,
                    should_be=f"{self.base_url}{normalized}",
                    issue=f"Canonical URL has a trailing slash. Should point to: {normalized}",
                )
            return CanonicalValidation(url=url, is_valid=True)

        result = self.resolve(normalized)
        if not result.resolved:
            return CanonicalValidation(
                url=url,
                is_valid=False,
                issue=f"Redirect loop detected for {normalized} after {result.hops} hops",
            )
        return CanonicalValidation(
            url=url,
            is_valid=False,
            should_be=f"{self.base_url}{result.final_path}",
            issue=f"Canonical URL points to redirected path. Should point to: {result.final_path}",
        )

    def validate_canonical_urls(self, urls: Iterable[str]) -> list[CanonicalValidation]:
        return [self.validate_canonical_url(url) for url in urls]
