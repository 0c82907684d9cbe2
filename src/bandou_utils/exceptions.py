"""Custom exception hierarchy for bandou-utils.

Every error raised by this package inherits from :class:`BandouError`.
Exceptions raised *by the code being reflected on* are never allowed to
leak unwrapped: they are re-raised as :class:`InvocationTargetError`
with the original exception attached as ``__cause__``.

Hierarchy
---------
BandouError
├── ArgumentError
├── MemberLookupError
├── MemberAccessError
├── InvocationTargetError
└── EnvironmentError
    └── DigestUnavailableError
"""

from __future__ import annotations


class BandouError(Exception):
    """Base exception for all bandou-utils errors.

    Every error condition maps to a subclass of this exception so that
    the CLI error boundary can render a clean message without leaking
    internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Caller mistakes -------------------------------------------------------

class ArgumentError(BandouError):
    """Raised when a required argument is missing or of the wrong kind.

    Always detected before any introspection takes place.
    """


# --- Reflection ------------------------------------------------------------

class MemberLookupError(BandouError):
    """Raised when a named constructor, field or method is not declared."""


class MemberAccessError(BandouError):
    """Raised when a member cannot be read, written or instantiated."""


class InvocationTargetError(BandouError):
    """Raised when a reflectively invoked constructor or method fails.

    The exception raised by the callee is available both as
    :attr:`target_exception` and as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        target_exception: BaseException,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.target_exception: BaseException = target_exception


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(BandouError):
    """Raised when a required runtime dependency is not available."""


class DigestUnavailableError(EnvironmentError):
    """The interpreter's OpenSSL build refuses to provide MD5.

    This is treated as a defect of the environment: the digest module
    terminates the process with :attr:`exit_code` instead of returning.
    """

    exit_code: int = 3
