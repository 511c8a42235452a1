import re
from collections.abc import Iterable

from src.not_found.counter_store import NotFoundEntry

_DATED_PATH_RE = re.compile(r"/20(20|21|22|23|24)/")

# (keywords, destination), checked in order
SUGGESTION_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("microsoft", "windows", "office"), "/latest"),
    (("hindi", "हिंदी", "%e0%a4"), "/hindi"),
    (("english", "guide", "tutorial"), "/english"),
    (("travel", "tour", "place", "destination"), "/latest"),
    (("business", "startup", "company"), "/latest"),
    (("tech", "software", "app", "mobile"), "/latest"),
)


def suggest_redirect(pathname: str) -> str:
    lower = pathname.lower()
    for keywords, destination in SUGGESTION_RULES:
        if any(keyword in lower for keyword in keywords):
            return destination
    if _DATED_PATH_RE.search(lower):
        return "/latest"
    return "/"


def common_patterns(entries: Iterable[NotFoundEntry]) -> dict[str, int]:
    patterns: dict[str, int] = {}

    def bump(name: str, count: int) -> None:
        patterns[name] = patterns.get(name, 0) + count

    for entry in entries:
        url = entry.url
        if "microsoft" in url:
            bump("microsoft-related", entry.count)
        if "hindi" in url:
            bump("hindi-content", entry.count)
        if "%" in url:
            bump("encoded-chars", entry.count)
        if "cache" in url:
            bump("cache-files", entry.count)
        if _DATED_PATH_RE.search(url):
            bump("date-based", entry.count)
        if ".php" in url or ".asp" in url:
            bump("old-extensions", entry.count)
        if len(url) > 100:
            bump("very-long-urls", entry.count)
    return patterns
