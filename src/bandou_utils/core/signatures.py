"""Pure helpers for naming and signature matching.

Every function in this module is side-effect free apart from logging,
and depends only on the objects passed in.

* **Names** — Python's private-name mangling (``__x`` inside ``Owner``
  is stored as ``_Owner__x``).
* **Signatures** — exact parameter-type matching; no widening, no
  subclass or protocol assignability.
* **Final** — detection and removal of ``typing.Final`` qualifiers,
  for both evaluated and stringified annotations.
"""

from __future__ import annotations

import inspect
import re
import typing
from collections.abc import Callable, Sequence
from typing import Any

from bandou_utils.core.models import CallableSignature
from bandou_utils.log import get_logger

logger = get_logger(__name__)

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

# "Final", "Final[int]", "typing.Final[int]", "t.Final" ...
_FINAL_STRING = re.compile(
    r"^\s*(?:[A-Za-z_][\w.]*\.)?Final(?:\[(?P<inner>.*)\])?\s*$",
    re.DOTALL,
)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

def mangle_name(owner: type, name: str) -> str:
    """Return the attribute name Python stores *name* under inside *owner*."""
    if not name.startswith("__") or name.endswith("__"):
        return name
    prefix = owner.__name__.lstrip("_")
    if not prefix:
        # Classes named only with underscores do not mangle.
        return name
    return f"_{prefix}{name}"


def candidate_names(owner: type, name: str) -> tuple[str, ...]:
    """Storage names to try for *name*, mangled form first."""
    mangled = mangle_name(owner, name)
    if mangled == name:
        return (name,)
    return (mangled, name)


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

def _resolved_hints(func: Callable[..., Any]) -> dict[str, Any]:
    target = inspect.unwrap(getattr(func, "__func__", func))
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError, AttributeError):
        # Unresolvable forward references: compare the raw annotations.
        return dict(getattr(target, "__annotations__", None) or {})


def describe_callable(
    func: Callable[..., Any],
    *,
    skip_first: bool = False,
) -> CallableSignature:
    """Summarise the parameters of *func*.

    Parameters
    ----------
    func:
        A plain function, or any callable :func:`inspect.signature`
        understands.
    skip_first:
        Drop the leading ``self``/``cls`` parameter of an unbound
        function.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError, NameError):
        return CallableSignature(
            parameter_types=(),
            required_positional=0,
            introspectable=False,
        )

    parameters = list(signature.parameters.values())
    if skip_first and parameters and parameters[0].kind in _POSITIONAL_KINDS:
        parameters = parameters[1:]

    hints = _resolved_hints(func)
    positional = [p for p in parameters if p.kind in _POSITIONAL_KINDS]
    return CallableSignature(
        parameter_types=tuple(hints.get(p.name, object) for p in positional),
        required_positional=sum(1 for p in positional if p.default is p.empty),
        required_keyword_only=sum(
            1
            for p in parameters
            if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is p.empty
        ),
    )


def wants_arguments(
    parameter_types: Sequence[Any] | None,
    args: Sequence[Any] | None,
) -> bool:
    """Decide between the typed overload and the zero-argument form.

    Only non-empty sequences of equal length select the typed form.
    Anything else (``None``, empty, or a length mismatch) selects the
    zero-argument form; a mismatch is logged because it usually means a
    caller bug.
    """
    if not parameter_types or not args:
        return False
    if len(parameter_types) != len(args):
        logger.warning(
            "Got %d parameter types but %d arguments; "
            "falling back to the zero-argument form.",
            len(parameter_types),
            len(args),
        )
        return False
    return True


def format_types(types: Sequence[Any]) -> str:
    """Render a parameter-type sequence for error messages."""
    return ", ".join(
        t.__qualname__ if isinstance(t, type) else repr(t) for t in types
    )


# ---------------------------------------------------------------------------
# Final qualifier
# ---------------------------------------------------------------------------

def is_final(annotation: Any) -> bool:
    """Return ``True`` when *annotation* is ``Final`` or ``Final[...]``."""
    if isinstance(annotation, str):
        return _FINAL_STRING.match(annotation) is not None
    return annotation is typing.Final or typing.get_origin(annotation) is typing.Final


def strip_final(annotation: Any) -> Any:
    """Return *annotation* without its ``Final`` wrapper.

    A bare ``Final`` becomes ``typing.Any``; non-final annotations are
    returned unchanged.
    """
    if isinstance(annotation, str):
        match = _FINAL_STRING.match(annotation)
        if match is None:
            return annotation
        return (match.group("inner") or "typing.Any").strip()
    if annotation is typing.Final:
        return typing.Any
    if typing.get_origin(annotation) is typing.Final:
        return typing.get_args(annotation)[0]
    return annotation
