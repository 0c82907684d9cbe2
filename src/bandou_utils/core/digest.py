"""MD5 fingerprints of text and of object sequences.

The digest is a stable, order-sensitive fingerprint, **not** a security
primitive: MD5 is requested with ``usedforsecurity=False``.

* :func:`digest_text` — UTF-8 bytes of a string.
* :func:`digest` / :func:`digest_all` — ``str()`` of every object,
  concatenated without separator, then :func:`digest_text`.

A platform that cannot provide MD5 at all is an environment defect: the
failure is logged and the process exits with
:attr:`DigestUnavailableError.exit_code`.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import Any

from bandou_utils.exceptions import ArgumentError, DigestUnavailableError
from bandou_utils.log import get_logger

logger = get_logger(__name__)

ALGORITHM: str = "md5"
ENCODING: str = "utf-8"
DIGEST_HEX_LENGTH: int = 32


def _new_hash() -> Any:
    try:
        return hashlib.new(ALGORITHM, usedforsecurity=False)
    except ValueError as exc:
        error = DigestUnavailableError(
            f"{ALGORITHM.upper()} is not available in this Python build.",
            hint="The interpreter's OpenSSL may be restricted (FIPS mode).",
        )
        error.__cause__ = exc
        logger.critical("%s %s", error, error.hint)
        raise SystemExit(error.exit_code) from error


def digest_bytes(data: bytes) -> str:
    """Return the 32-character lowercase hex MD5 of *data*."""
    if data is None:
        raise ArgumentError("data must not be None.")
    hasher = _new_hash()
    hasher.update(data)
    return hasher.hexdigest()


def digest_text(text: str) -> str:
    """Return the MD5 of *text* encoded as UTF-8.

    Raises
    ------
    ArgumentError
        If *text* is ``None``, not a ``str``, or contains lone
        surrogates that UTF-8 cannot encode.
    """
    if text is None:
        raise ArgumentError("text must not be None.")
    if not isinstance(text, str):
        raise ArgumentError(
            f"text must be str, got {type(text).__name__}.",
            hint="Use digest() to fingerprint arbitrary objects.",
        )
    try:
        encoded = text.encode(ENCODING)
    except UnicodeEncodeError as exc:
        raise ArgumentError(f"text is not encodable as {ENCODING}: {exc}") from exc
    return digest_bytes(encoded)


def digest_all(objects: Iterable[object]) -> str:
    """Digest the concatenated ``str()`` of *objects*, in order."""
    parts: list[str] = []
    for position, part in enumerate(objects):
        if part is None:
            raise ArgumentError(f"Object at position {position} is None.")
        parts.append(str(part))
    return digest_text("".join(parts))


def digest(*objects: object) -> str:
    """Digest the concatenated ``str()`` of the arguments.

    ``digest("abc") == digest_text("abc")`` and ``digest()`` is the
    digest of the empty string.
    """
    return digest_all(objects)
