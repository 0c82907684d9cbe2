"""Reflective accessor — construct, read, write and invoke past visibility.

Python enforces visibility by convention only, but a class can still
make members awkward to reach: private names are mangled, custom
``__getattribute__``/``__setattr__`` hooks intercept access, frozen
dataclasses refuse writes, and a metaclass can refuse construction or
class-attribute assignment.  The functions in this module go around all
of those:

* private names are resolved to their mangled storage name;
* reads and writes go through ``object.__getattribute__``,
  ``object.__setattr__`` and ``type.__setattr__`` directly;
* construction calls ``__new__``/``__init__`` without going through the
  metaclass ``__call__``;
* methods are taken from the class ``__dict__`` and called as raw
  functions.

Lookups only consider members declared on the given class itself, not
those it inherits (instance attributes present in the object's
``__dict__`` always count as declared).

Overload selection is **exact-match only**: when ``parameter_types``
and ``args`` are both non-empty and of equal length, the callable's
positional parameter annotations must equal ``parameter_types``.  In
every other case the zero-argument form is used.

All functions are stateless.  :func:`set_static_field` is the one
exception to "no side effects": it permanently rewrites shared class
state and callers are responsible for any synchronisation.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable, Sequence
from typing import Any

from bandou_utils.core.models import CallableSignature, DeclaredMember
from bandou_utils.core.signatures import (
    candidate_names,
    describe_callable,
    format_types,
    is_final,
    strip_final,
    wants_arguments,
)
from bandou_utils.exceptions import (
    ArgumentError,
    InvocationTargetError,
    MemberAccessError,
    MemberLookupError,
)
from bandou_utils.log import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------

def _require_type(type_: Any) -> type:
    if type_ is None:
        raise ArgumentError("type must not be None.")
    if not isinstance(type_, type):
        raise ArgumentError(
            f"Expected a class, got {type(type_).__name__} instance.",
            hint="Pass the class object itself, e.g. Owner rather than Owner().",
        )
    return type_


def _require_name(name: Any) -> str:
    if name is None:
        raise ArgumentError("name must not be None.")
    if not isinstance(name, str):
        raise ArgumentError(f"name must be str, got {type(name).__name__}.")
    return name


def _require_instance(owner: type, instance: Any) -> None:
    if instance is None:
        raise ArgumentError("instance must not be None.")
    if not isinstance(instance, owner):
        raise ArgumentError(
            f"{type(instance).__qualname__} object is not an instance "
            f"of {owner.__qualname__}.",
        )


def _require_value(value: Any) -> None:
    if value is None:
        raise ArgumentError("value must not be None.")


# ---------------------------------------------------------------------------
# Member lookup
# ---------------------------------------------------------------------------

def _own_annotations(owner: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(owner))
    except NameError:
        # Deferred annotations (3.14+) naming something undefined.
        import annotationlib

        return dict(
            annotationlib.get_annotations(
                owner, format=annotationlib.Format.FORWARDREF,
            )
        )


def _instance_dict(instance: Any) -> dict[str, Any]:
    try:
        return object.__getattribute__(instance, "__dict__")
    except AttributeError:
        return {}


def _is_data_entry(entry: Any) -> bool:
    """True for class-namespace entries holding data rather than behaviour."""
    return not (
        isinstance(entry, (staticmethod, classmethod, property, type))
        or inspect.isroutine(entry)
    )


def _is_static_entry(entry: Any) -> bool:
    """Like :func:`_is_data_entry`, minus ``__slots__`` descriptors."""
    return _is_data_entry(entry) and not (
        inspect.ismemberdescriptor(entry) or inspect.isgetsetdescriptor(entry)
    )


def _find_instance_field(owner: type, instance: Any, name: str) -> DeclaredMember:
    annotations = _own_annotations(owner)
    namespace = vars(owner)
    attributes = _instance_dict(instance)

    for attribute in candidate_names(owner, name):
        entry = namespace.get(attribute)
        if attribute in annotations or attribute in attributes:
            return DeclaredMember(owner, name, attribute, entry)
        if attribute in namespace and _is_data_entry(entry):
            return DeclaredMember(owner, name, attribute, entry)

    raise MemberLookupError(f"{owner.__qualname__} declares no field {name!r}.")


def _find_static_field(owner: type, name: str) -> DeclaredMember:
    namespace = vars(owner)
    attributes = candidate_names(owner, name)

    for attribute in attributes:
        if attribute in namespace and _is_static_entry(namespace[attribute]):
            return DeclaredMember(owner, name, attribute, namespace[attribute])

    annotations = _own_annotations(owner)
    if any(attribute in annotations for attribute in attributes):
        raise MemberLookupError(
            f"{owner.__qualname__}.{name} has no class-level value.",
            hint="Annotation-only names are instance fields; use get_field().",
        )
    raise MemberLookupError(f"{owner.__qualname__} declares no static field {name!r}.")


def _find_method(owner: type, name: str) -> DeclaredMember:
    namespace = vars(owner)

    for attribute in candidate_names(owner, name):
        entry = namespace.get(attribute)
        if isinstance(entry, (staticmethod, classmethod)) or inspect.isroutine(entry):
            return DeclaredMember(owner, name, attribute, entry)

    raise MemberLookupError(
        f"{owner.__qualname__} declares no method {name!r}.",
        hint="Only methods defined on the class itself are searched.",
    )


# ---------------------------------------------------------------------------
# Overload selection and invocation
# ---------------------------------------------------------------------------

def _select_arguments(
    label: str,
    signature: CallableSignature,
    parameter_types: Sequence[Any] | None,
    args: Sequence[Any] | None,
) -> tuple[Any, ...]:
    """Return the positional arguments to call with, or raise a lookup error."""
    if wants_arguments(parameter_types, args):
        requested = tuple(parameter_types or ())
        if not signature.matches(requested):
            raise MemberLookupError(
                f"{label} does not take ({format_types(requested)}).",
                hint=f"Declared parameters: ({format_types(signature.parameter_types)}).",
            )
        return tuple(args or ())

    if not signature.accepts_no_arguments:
        raise MemberLookupError(
            f"{label} has no zero-argument form.",
            hint=f"Declared parameters: ({format_types(signature.parameter_types)}).",
        )
    return ()


def _call_target(label: str, func: Callable[..., Any], call_args: tuple[Any, ...]) -> Any:
    try:
        return func(*call_args)
    except Exception as exc:
        raise InvocationTargetError(
            f"{label} raised {type(exc).__name__}: {exc}",
            exc,
        ) from exc


def _construct(owner: type, call_args: tuple[Any, ...]) -> Any:
    custom_new = owner.__new__ is not object.__new__
    custom_init = owner.__init__ is not object.__init__

    if custom_new:
        instance = _call_target(
            f"{owner.__qualname__}.__new__", owner.__new__, (owner, *call_args),
        )
    else:
        try:
            instance = object.__new__(owner)
        except TypeError as exc:
            raise MemberAccessError(
                f"{owner.__qualname__} cannot be instantiated: {exc}",
            ) from exc

    if custom_init and isinstance(instance, owner):
        _call_target(
            f"{owner.__qualname__}.__init__", owner.__init__, (instance, *call_args),
        )
    return instance


def _write_class_attribute(member: DeclaredMember, attribute: str, value: Any) -> None:
    try:
        type.__setattr__(member.owner, attribute, value)
    except (AttributeError, TypeError) as exc:
        raise MemberAccessError(
            f"Cannot modify {member.qualified_name}: {exc}",
        ) from exc


# ---------------------------------------------------------------------------
# Public API — construction
# ---------------------------------------------------------------------------

def new_instance(
    type_: type,
    parameter_types: Sequence[Any] | None = None,
    args: Sequence[Any] | None = None,
) -> Any:
    """Create an instance of *type_* without going through its metaclass.

    ``__new__`` and ``__init__`` are called directly, so a metaclass
    ``__call__`` that forbids direct construction (singletons,
    factory-only classes) is bypassed.

    Raises
    ------
    ArgumentError
        If *type_* is ``None`` or not a class.
    MemberLookupError
        If no constructor matches *parameter_types* (or there is no
        zero-argument constructor when one is required).
    MemberAccessError
        If the class cannot be instantiated at all (e.g. it is abstract).
    InvocationTargetError
        If ``__new__`` or ``__init__`` raises.
    """
    owner = _require_type(type_)

    if owner.__init__ is object.__init__ and owner.__new__ is not object.__new__:
        signature = describe_callable(owner.__new__, skip_first=True)
    else:
        signature = describe_callable(owner.__init__, skip_first=True)

    call_args = _select_arguments(
        f"{owner.__qualname__} constructor", signature, parameter_types, args,
    )
    logger.debug(
        "Constructing %s with %d argument(s), bypassing %s.__call__",
        owner.__qualname__,
        len(call_args),
        type(owner).__qualname__,
    )
    return _construct(owner, call_args)


# ---------------------------------------------------------------------------
# Public API — fields
# ---------------------------------------------------------------------------

def get_field(type_: type, instance: Any, name: str) -> Any:
    """Read field *name* of *instance*, including private fields.

    Custom ``__getattribute__``/``__getattr__`` hooks are not consulted.

    Raises
    ------
    ArgumentError
        If an argument is ``None`` or *instance* is not a *type_*.
    MemberLookupError
        If *type_* declares no such field, or it holds no value.
    """
    owner = _require_type(type_)
    _require_instance(owner, instance)
    _require_name(name)

    member = _find_instance_field(owner, instance, name)
    try:
        return object.__getattribute__(instance, member.attribute)
    except AttributeError as exc:
        raise MemberLookupError(
            f"Field {member.qualified_name} has no value on this instance.",
        ) from exc


def get_static_field(type_: type, name: str) -> Any:
    """Read class attribute *name* declared directly on *type_*."""
    owner = _require_type(type_)
    _require_name(name)
    return _find_static_field(owner, name).value


def set_field(type_: type, instance: Any, name: str, value: Any) -> None:
    """Write field *name* of *instance*, including private fields.

    Goes through ``object.__setattr__``, so frozen dataclasses and custom
    ``__setattr__`` guards do not stop the write.

    Raises
    ------
    ArgumentError
        If an argument (including *value*) is ``None``, or *instance*
        is not a *type_*.
    MemberLookupError
        If *type_* declares no such field.
    MemberAccessError
        If the object cannot store the attribute at all.
    """
    owner = _require_type(type_)
    _require_instance(owner, instance)
    _require_name(name)
    _require_value(value)

    member = _find_instance_field(owner, instance, name)
    try:
        object.__setattr__(instance, member.attribute, value)
    except (AttributeError, TypeError) as exc:
        raise MemberAccessError(
            f"Cannot write field {member.qualified_name}: {exc}",
        ) from exc


def set_static_field(type_: type, name: str, value: Any) -> None:
    """Overwrite class attribute *name*, **even if it is declared Final**.

    This is an escape hatch that breaks a guarantee the class author
    asked for: a ``typing.Final`` qualifier on the attribute is removed
    from the class annotations, and the write goes through
    ``type.__setattr__`` so a metaclass ``__setattr__`` guard is skipped.
    The change is visible to every user of the class.

    Raises
    ------
    ArgumentError
        If an argument (including *value*) is ``None``.
    MemberLookupError
        If *type_* declares no such class attribute.
    MemberAccessError
        If the class (e.g. a built-in type) refuses the write.
    """
    owner = _require_type(type_)
    _require_name(name)
    _require_value(value)

    member = _find_static_field(owner, name)
    annotations = _own_annotations(owner)
    if member.attribute in annotations and is_final(annotations[member.attribute]):
        logger.warning(
            "Removing Final qualifier from %s; it is no longer constant.",
            member.qualified_name,
        )
        annotations[member.attribute] = strip_final(annotations[member.attribute])
        _write_class_attribute(member, "__annotations__", annotations)

    _write_class_attribute(member, member.attribute, value)


# ---------------------------------------------------------------------------
# Public API — methods
# ---------------------------------------------------------------------------

def _invoke(
    owner: type,
    receiver: Any,
    name: str,
    parameter_types: Sequence[Any] | None,
    args: Sequence[Any] | None,
) -> Any:
    member = _find_method(owner, name)
    entry = member.value

    if isinstance(entry, staticmethod):
        target, bound = entry.__func__, ()
    elif isinstance(entry, classmethod):
        cls = owner if receiver is None else type(receiver)
        target, bound = entry.__func__, (cls,)
    elif isinstance(entry, types.ClassMethodDescriptorType):
        # Built-in class methods such as dict.fromkeys.
        cls = owner if receiver is None else type(receiver)
        target, bound = entry.__get__(None, cls), ()
    elif receiver is None:
        raise ArgumentError(
            f"{member.qualified_name} is an instance method.",
            hint="Use invoke_method() with an instance.",
        )
    elif inspect.isfunction(entry):
        target, bound = entry, (receiver,)
    else:
        # Built-in method descriptors: let the descriptor bind itself.
        target, bound = entry.__get__(receiver, owner), ()

    signature = describe_callable(target, skip_first=bool(bound))
    call_args = _select_arguments(member.qualified_name, signature, parameter_types, args)
    logger.debug("Invoking %s with %d argument(s)", member.qualified_name, len(call_args))
    return _call_target(member.qualified_name, target, (*bound, *call_args))


def invoke_method(
    type_: type,
    instance: Any,
    name: str,
    parameter_types: Sequence[Any] | None = None,
    args: Sequence[Any] | None = None,
) -> Any:
    """Call method *name* declared on *type_* with *instance* as receiver.

    Returns whatever the method returns (``None`` for procedures).
    Static and class methods may be invoked this way too.

    Raises
    ------
    ArgumentError
        If an argument is ``None`` or *instance* is not a *type_*.
    MemberLookupError
        If no declared method matches.
    InvocationTargetError
        If the method raises; the original exception is the cause.
    """
    owner = _require_type(type_)
    _require_instance(owner, instance)
    _require_name(name)
    return _invoke(owner, instance, name, parameter_types, args)


def invoke_static_method(
    type_: type,
    name: str,
    parameter_types: Sequence[Any] | None = None,
    args: Sequence[Any] | None = None,
) -> Any:
    """Call a ``staticmethod`` or ``classmethod`` declared on *type_*.

    Class methods of built-in types (``dict.fromkeys``) count too.

    Raises :class:`ArgumentError` for plain instance methods; otherwise
    fails like :func:`invoke_method`.
    """
    owner = _require_type(type_)
    _require_name(name)
    return _invoke(owner, None, name, parameter_types, args)
