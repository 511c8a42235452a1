"""Canonical URL helpers bound to the site's redirect table.

Page metadata code calls these instead of building absolute URLs by hand so
that ``<link rel="canonical">`` never points at a path that redirects.
"""

from collections.abc import Iterable

from src.config.settings import MAX_REDIRECT_HOPS, SITE_BASE_URL
from src.redirects.domain.models import CanonicalValidation, ResolvedCanonical
from src.redirects.domain.resolver import CanonicalResolver
from src.redirects.domain.rule_table import RedirectRuleTable
from src.redirects.domain.rules import DEFAULT_REDIRECT_RULES

default_rule_table = RedirectRuleTable(DEFAULT_REDIRECT_RULES)
default_resolver = CanonicalResolver(default_rule_table, base_url=SITE_BASE_URL, max_hops=MAX_REDIRECT_HOPS)


def resolve(path: str) -> ResolvedCanonical:
    return default_resolver.resolve(path)


def generate_canonical_url(path: str, base_url: str | None = None) -> str:
    return default_resolver.generate_canonical_url(path, base_url)


def would_redirect(path: str) -> bool:
    return default_resolver.would_redirect(path)


def redirect_destination(path: str) -> str | None:
    return default_resolver.redirect_destination(path)


def validate_canonical_url(url: str) -> CanonicalValidation:
    return default_resolver.validate_canonical_url(url)


def validate_canonical_urls(urls: Iterable[str]) -> list[CanonicalValidation]:
    return default_resolver.validate_canonical_urls(urls)
