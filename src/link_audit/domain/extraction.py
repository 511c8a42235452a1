import html
import re
from collections.abc import Callable, Iterable
from urllib.parse import urlsplit

from src.link_audit.domain.entities import ExtractedLink

# Tolerant anchor matcher; not an HTML parser. Inner text may hold inline tags
# but never another anchor.
_ANCHOR_RE = re.compile(
    r"<a\b[^>]*?\b(?P<attr>href\s*=\s*(?:\"(?P<dq>[^\"<>]*)\"|'(?P<sq>[^'<>]*)'))[^>]*>"
    r"(?P<text>(?:(?!<a\b|</a\s*>).)*)</a\s*>",
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_IGNORED_SCHEMES = ("mailto:", "tel:", "javascript:", "data:", "sms:")


def site_hosts(site_origins: Iterable[str]) -> frozenset[str]:
    hosts = set()
    for origin in site_origins:
        host = urlsplit(origin if "//" in origin else f"//{origin}").hostname
        if host:
            hosts.add(host.lower())
    return frozenset(hosts)


def to_internal_path(url: str, hosts: frozenset[str]) -> str | None:
    """Path of an internal link with query and fragment removed, else None."""
    candidate = html.unescape(url or "").strip()
    if not candidate or candidate.startswith("#"):
        return None
    if candidate.lower().startswith(_IGNORED_SCHEMES):
        return None
    try:
        parts = urlsplit(candidate)
        host = parts.hostname
    except ValueError:
        return None

    if parts.scheme or parts.netloc:
        if parts.scheme not in ("", "http", "https"):
            return None
        if not host or host.lower() not in hosts:
            return None
        return parts.path or "/"
    if candidate.startswith("/"):
        return parts.path or "/"
    return None


def _href_value(match: re.Match[str]) -> str:
    return match.group("dq") if match.group("dq") is not None else match.group("sq")


def _clean_text(raw: str) -> str:
    return _WS_RE.sub(" ", html.unescape(_TAG_RE.sub("", raw))).strip()


def extract_links(body: str | None, site_origins: Iterable[str]) -> list[ExtractedLink]:
    if not body:
        return []
    hosts = site_hosts(site_origins)
    links: list[ExtractedLink] = []
    for match in _ANCHOR_RE.finditer(body):
        url = _href_value(match)
        if not url:
            continue
        path = to_internal_path(url, hosts)
        if path is None:
            continue
        links.append(ExtractedLink(url=url, link_text=_clean_text(match.group("text")), path=path))
    return links


def rewrite_links(
    body: str | None,
    site_origins: Iterable[str],
    target_for: Callable[[str], str | None],
) -> tuple[str, int]:
    """Replace the href of each internal anchor whose path ``target_for`` maps to a new URL.

    Anchors are matched exactly as ``extract_links`` matches them, so every
    link a scan reports can be rewritten. The whole attribute becomes
    ``href="<target>"``; query and fragment of the old URL are dropped.
    """
    if not body:
        return body or "", 0
    hosts = site_hosts(site_origins)
    replaced = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal replaced
        url = _href_value(match)
        path = to_internal_path(url, hosts) if url else None
        target = target_for(path) if path is not None else None
        if target is None:
            return match.group(0)
        replaced += 1
        anchor = match.group(0)
        start = match.start("attr") - match.start()
        end = match.end("attr") - match.start()
        return f'{anchor[:start]}href="{target}"{anchor[end:]}'

    return _ANCHOR_RE.sub(substitute, body), replaced
