class RedirectConfigError(Exception):
    """Base class for problems in a redirect rule table."""


class InvalidPatternError(RedirectConfigError, ValueError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid redirect pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class RedirectLoopError(RedirectConfigError):
    def __init__(self, path: str, chain: tuple[str, ...], max_hops: int) -> None:
        super().__init__(
            f"Redirect chain for {path!r} did not settle within {max_hops} hops: {' -> '.join(chain)}"
        )
        self.path = path
        self.chain = chain
        self.max_hops = max_hops
