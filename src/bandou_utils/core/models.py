"""Value objects produced while resolving members.

All models are **frozen** dataclasses created and discarded within a
single accessor call; nothing here is cached.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Resolved member
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DeclaredMember:
    """A field or method found in a class's own namespace."""

    owner: type
    """The class the lookup was performed on."""

    name: str
    """Name as requested by the caller (e.g. ``"__secret"``)."""

    attribute: str
    """Storage name after private-name mangling (e.g. ``"_Owner__secret"``)."""

    value: Any = None
    """Raw ``owner.__dict__`` entry, or ``None`` for instance-only fields."""

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}"


# ---------------------------------------------------------------------------
# Callable shape
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CallableSignature:
    """Parameter shape of a constructor or method, receiver excluded.

    Only positional parameters take part in type matching; ``*args``
    and ``**kwargs`` are ignored, and a required keyword-only parameter
    makes the callable unreachable through a positional argument list.
    """

    parameter_types: tuple[Any, ...]
    """Resolved annotations of the positional parameters, in order."""

    required_positional: int
    """Number of positional parameters without a default."""

    required_keyword_only: int = 0
    """Number of keyword-only parameters without a default."""

    introspectable: bool = True
    """``False`` when :func:`inspect.signature` could not read the callable."""

    @property
    def accepts_no_arguments(self) -> bool:
        """Whether this is the zero-argument form.

        Callables whose signature cannot be read are given the benefit
        of the doubt; the call itself will report a mismatch.
        """
        if not self.introspectable:
            return True
        return self.required_positional == 0 and self.required_keyword_only == 0

    def matches(self, parameter_types: Sequence[Any]) -> bool:
        """Exact, order-sensitive comparison of declared parameter types."""
        if not self.introspectable or self.required_keyword_only:
            return False
        return self.parameter_types == tuple(parameter_types)
