"""
Retry policy — which installer failures are worth another attempt.

Only failures that look like network trouble are retried, a fixed
number of times, with a fixed delay between attempts.  Anything else
is reported immediately.
"""

from __future__ import annotations

from dataclasses import dataclass

# Substrings (case-insensitive) that mark a failure as transient
TRANSIENT_SIGNATURES: tuple[str, ...] = (
    "ECONNRESET",
    "ETIMEDOUT",
    "ENOTFOUND",
    "network",
    "timeout",
    "fetch failed",
)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry for transient installer failures.

    ``max_retries`` counts attempts after the first one, so the
    default allows two attempts in total.
    """

    max_retries: int = 1
    delay: float = 1.0
    signatures: tuple[str, ...] = TRANSIENT_SIGNATURES

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def is_transient(self, error: str | None) -> bool:
        """Whether ``error`` matches one of the transient signatures."""
        if not error:
            return False
        lowered = error.lower()
        return any(sig.lower() in lowered for sig in self.signatures)

    def should_retry(self, attempt: int, error: str | None) -> bool:
        """Whether to try again after failed attempt number ``attempt`` (1-based)."""
        if attempt >= self.max_attempts:
            return False
        return self.is_transient(error)
