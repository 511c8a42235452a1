"""Redirect source patterns.

Three shapes are supported, in the style of the site's framework redirects:

* exact paths: ``/diwali2020``
* ``*`` wildcards, matching any run of characters: ``/microsoft*``
* one named parameter: ``:name`` matches a single segment, ``:name*`` the
  remainder of the path including slashes (``/blog/:slug*``). A ``/:name*``
  token also accepts an empty remainder, so ``/blog/:slug*`` matches ``/blog``.

The captured parameter is substituted into the destination at the same token.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from re import Pattern

from src.redirects.domain.errors import InvalidPatternError

_TOKEN_RE = re.compile(r"(?P<slash>/?):(?P<name>[A-Za-z_]\w*)(?P<star>\*?)|(?P<wild>\*)")


def escape_regex(text: str) -> str:
    """Escape every regex metacharacter in content-derived text."""
    return re.escape(text)


@dataclass(frozen=True)
class CompiledPattern:
    source: str
    regex: Pattern[str]
    param_name: str | None = None
    is_exact: bool = True

    def match(self, path: str) -> re.Match[str] | None:
        return self.regex.match(path)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> CompiledPattern:
    if not pattern or not pattern.startswith("/"):
        raise InvalidPatternError(pattern, "pattern must start with '/'")

    parts: list[str] = []
    param_name: str | None = None
    has_wildcard = False
    pos = 0
    for token in _TOKEN_RE.finditer(pattern):
        parts.append(escape_regex(pattern[pos : token.start()]))
        pos = token.end()
        if token.group("wild"):
            has_wildcard = True
            parts.append(".*")
            continue
        if param_name is not None:
            raise InvalidPatternError(pattern, "only one parameter token is supported")
        param_name = token.group("name")
        slash = token.group("slash")
        if token.group("star"):
            if slash:
                parts.append(f"(?:/(?P<{param_name}>.*))?")
            else:
                parts.append(f"(?P<{param_name}>.*)")
        else:
            parts.append(f"{escape_regex(slash)}(?P<{param_name}>[^/]+)")
    parts.append(escape_regex(pattern[pos:]))

    try:
        regex = re.compile("^" + "".join(parts) + "$")
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc
    return CompiledPattern(
        source=pattern,
        regex=regex,
        param_name=param_name,
        is_exact=param_name is None and not has_wildcard,
    )


def matches(path: str, pattern: str) -> bool:
    if path == pattern:
        return True
    return compile_pattern(pattern).match(path) is not None


def destination_for(path: str, pattern: str, destination_template: str) -> str:
    """Build the destination for ``path``; ``path`` must match ``pattern``."""
    compiled = compile_pattern(pattern)
    if compiled.param_name is None:
        return destination_template
    match = compiled.match(path)
    if match is None:
        raise ValueError(f"Path {path!r} does not match pattern {pattern!r}")
    captured = match.group(compiled.param_name) or ""
    token_re = re.compile(rf":{escape_regex(compiled.param_name)}\*?(?!\w)")
    # Function replacement keeps backslashes in the captured text literal.
    return token_re.sub(lambda _m: captured, destination_template)
