"""Classes whose annotations stay unevaluated strings.

The counterpart of ``sample_types``: with postponed evaluation a
``Final`` qualifier reaches the reflective accessor as text.
"""

from __future__ import annotations

from typing import Final


def build_retry_policy_type() -> type:
    """Return a fresh ``RetryPolicy`` class per call."""

    class RetryPolicy:
        RETRIES: Final[int] = 3
        BACKOFF: Final = 0.5
        name: str = "default"

    return RetryPolicy
