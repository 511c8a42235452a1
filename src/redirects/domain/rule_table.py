from collections.abc import Iterable, Iterator, Mapping

from src.redirects.domain.models import RedirectRule
from src.redirects.domain.patterns import CompiledPattern, compile_pattern, destination_for


class RedirectRuleTable:
    """Ordered redirect rules; the first rule whose pattern matches wins."""

    def __init__(self, rules: Iterable[RedirectRule]) -> None:
        self._rules: tuple[RedirectRule, ...] = tuple(rules)
        # Compiling up front surfaces malformed patterns at construction time.
        self._compiled: tuple[CompiledPattern, ...] = tuple(
            compile_pattern(rule.source_pattern) for rule in self._rules
        )
        self._exact_index: dict[str, int] = {}
        for idx, (rule, compiled) in enumerate(zip(self._rules, self._compiled)):
            if compiled.is_exact:
                self._exact_index.setdefault(rule.source_pattern, idx)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str], permanent: bool = True) -> "RedirectRuleTable":
        return cls(RedirectRule(source, destination, permanent) for source, destination in mapping.items())

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RedirectRule]:
        return iter(self._rules)

    @property
    def is_exact(self) -> bool:
        return all(compiled.is_exact for compiled in self._compiled)

    def non_exact_sources(self) -> list[str]:
        return [rule.source_pattern for rule, compiled in zip(self._rules, self._compiled) if not compiled.is_exact]

    def sources(self) -> tuple[str, ...]:
        return tuple(rule.source_pattern for rule in self._rules)

    def first_match(self, path: str) -> tuple[RedirectRule, str] | None:
        exact_idx = self._exact_index.get(path)
        for idx, (rule, compiled) in enumerate(zip(self._rules, self._compiled)):
            if exact_idx is not None and idx == exact_idx:
                return rule, rule.destination
            if compiled.is_exact:
                continue
            if compiled.match(path) is not None:
                return rule, destination_for(path, rule.source_pattern, rule.destination)
        return None

    def to_dict(self) -> dict[str, str]:
        return {rule.source_pattern: rule.destination for rule in self._rules}
