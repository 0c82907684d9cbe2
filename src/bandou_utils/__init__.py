"""bandou-utils — reflective member access and string digests.

Two independent, stateless helpers: a reflective accessor that reaches
past Python's visibility conventions, and an MD5 digest computer.
"""

from bandou_utils.core.digest import digest, digest_all, digest_bytes, digest_text
from bandou_utils.core.reflect import (
    get_field,
    get_static_field,
    invoke_method,
    invoke_static_method,
    new_instance,
    set_field,
    set_static_field,
)
from bandou_utils.version import __version__

__all__: list[str] = [
    "__version__",
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
