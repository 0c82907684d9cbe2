"""Core layer — the reflective accessor and the digest computer.

Rules
-----
* No ``print()`` calls.
* No imports from ``cli``.
* Only :class:`~bandou_utils.exceptions.BandouError` subclasses escape,
  except for the deliberate ``SystemExit`` when MD5 is unavailable.
"""

from bandou_utils.core.digest import digest, digest_all, digest_bytes, digest_text
from bandou_utils.core.models import CallableSignature, DeclaredMember
from bandou_utils.core.reflect import (
    get_field,
    get_static_field,
    invoke_method,
    invoke_static_method,
    new_instance,
    set_field,
    set_static_field,
)

__all__: list[str] = [
    "CallableSignature",
    "DeclaredMember",
    "digest",
    "digest_all",
    "digest_bytes",
    "digest_text",
    "get_field",
    "get_static_field",
    "invoke_method",
    "invoke_static_method",
    "new_instance",
    "set_field",
    "set_static_field",
]
