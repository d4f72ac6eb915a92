"""
Type descriptors over Python annotations.

A TypeDescriptor wraps one annotation (a class, a parameterized generic
such as ``list[User]``, ``dict[str, Role]``, ``tuple[int, ...]``) and answers
the questions schema synthesis needs: which kind of value it describes,
what its element or value type is, and which properties it declares.

``Optional[X]``/``X | None`` and ``Annotated[X, ...]`` are unwrapped to ``X``;
Annotated metadata is kept on the descriptor (and on the Property that
declared it) so field markers such as ``RequestParameter`` stay visible.

Usage:
    from actiondoc.types import TypeDescriptor, resolve_generic_arguments

    td = TypeDescriptor.of(list[User])
    td.is_container()               # True
    td.element_type()               # TypeDescriptor(User)
    list(TypeDescriptor.of(User).declared_properties())
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
import inspect
import numbers
import sys
import types
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import (
    Annotated,
    Any,
    Callable,
    ClassVar,
    Generic,
    Iterator,
    Optional,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)

# Bases whose members are never reported as properties
_UNIVERSAL_BASES: frozenset[Any] = frozenset({object, Enum, Generic, Protocol})

STRING_LIKE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    datetime.date,  # also covers datetime.datetime
    datetime.time,
)
FLOATING_TYPES: tuple[type, ...] = (float, decimal.Decimal)


def _strip(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Unwrap Annotated and Optional layers, collecting Annotated metadata."""
    metadata: tuple[Any, ...] = ()
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            metadata += tuple(annotation.__metadata__)
            annotation = get_args(annotation)[0]
            continue
        if origin in _UNION_ORIGINS:
            members = get_args(annotation)
            present = [m for m in members if m is not _NONE_TYPE]
            if len(present) == 1 and len(present) < len(members):
                annotation = present[0]
                continue
        return annotation, metadata


def _is_class(obj: Any) -> bool:
    return isinstance(obj, type)


@dataclass(frozen=True)
class TypeDescriptor:
    """Immutable identity of one declared type.

    Equality compares the unwrapped annotation only, so ``Optional[Node]``
    and ``Annotated[Node, ...]`` identify the same type as ``Node``.
    """

    annotation: Any
    metadata: tuple[Any, ...] = field(default=(), compare=False, repr=False)

    @classmethod
    def of(cls, annotation: Any, metadata: tuple[Any, ...] = ()) -> TypeDescriptor:
        bare, extra = _strip(annotation)
        return cls(bare, tuple(metadata) + extra)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def origin(self) -> Any:
        """The unsubscripted form: ``list`` for ``list[int]``, the class itself otherwise."""
        return get_origin(self.annotation) or self.annotation

    @property
    def args(self) -> tuple[Any, ...]:
        return get_args(self.annotation)

    @property
    def simple_name(self) -> str:
        origin = self.origin
        return getattr(origin, "__name__", None) or repr(origin)

    def is_void(self) -> bool:
        return self.annotation is None or self.annotation is _NONE_TYPE

    def is_union(self) -> bool:
        return get_origin(self.annotation) in _UNION_ORIGINS

    # ------------------------------------------------------------------
    # Kind predicates
    # ------------------------------------------------------------------

    def is_string_like(self) -> bool:
        return _is_class(self.annotation) and issubclass(self.annotation, STRING_LIKE_TYPES)

    def is_boolean(self) -> bool:
        return self.annotation is bool

    def is_enumeration(self) -> bool:
        return _is_class(self.annotation) and issubclass(self.annotation, Enum)

    def is_floating(self) -> bool:
        return _is_class(self.annotation) and issubclass(self.annotation, FLOATING_TYPES)

    def is_numeric(self) -> bool:
        return _is_class(self.annotation) and issubclass(self.annotation, numbers.Number)

    def is_array(self) -> bool:
        """Tuples play the role of fixed arrays."""
        origin = self.origin
        return _is_class(origin) and issubclass(origin, tuple)

    def is_container(self) -> bool:
        """List- or set-like collections (not strings, mappings or tuples)."""
        origin = self.origin
        if not _is_class(origin):
            return False
        if issubclass(origin, (str, bytes, bytearray, tuple, collections.abc.Mapping)):
            return False
        return issubclass(origin, collections.abc.Collection)

    def is_mapping(self) -> bool:
        origin = self.origin
        return _is_class(origin) and issubclass(origin, collections.abc.Mapping)

    def is_object(self) -> bool:
        """A user-defined class (possibly parameterized) whose properties can be described."""
        origin = self.origin
        if not _is_class(origin) or origin in _UNIVERSAL_BASES:
            return False
        if self.is_string_like() or self.is_boolean() or self.is_numeric():
            return False
        if self.is_enumeration() or self.is_container() or self.is_mapping() or self.is_array():
            return False
        return origin.__module__ != "builtins"

    # ------------------------------------------------------------------
    # Type arguments
    # ------------------------------------------------------------------

    def element_type(self) -> Optional[TypeDescriptor]:
        """Element type of a parameterized container or homogeneous tuple."""
        args = self.args
        if self.is_container() and len(args) == 1:
            return TypeDescriptor.of(args[0])
        if self.is_array() and len(args) == 2 and args[1] is Ellipsis:
            return TypeDescriptor.of(args[0])
        return None

    def value_type(self) -> Optional[TypeDescriptor]:
        """Value type of a parameterized mapping."""
        args = self.args
        if self.is_mapping() and len(args) == 2:
            return TypeDescriptor.of(args[1])
        return None

    def enumeration_values(self) -> list[str]:
        if not self.is_enumeration():
            return []
        return [member.name for member in self.annotation]

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def declared_properties(self) -> Iterator[Property]:
        """Yield the readable properties of an object type in declaration order.

        Base classes come first. A name redeclared in a subclass keeps its
        original position but takes the subclass's annotation. Typed
        ``@property`` accessors follow the annotated attributes of the class
        that defines them. Private names, ClassVars and members of universal
        bases are skipped.

        Annotations are evaluated lazily: one that cannot be resolved raises
        from the iterator after every earlier property has been yielded.
        For a parameterized generic such as ``Page[User]`` the class's type
        variables are replaced by the bound arguments.
        """
        origin = self.origin
        if not _is_class(origin):
            return
        bindings = dict(zip(getattr(origin, "__parameters__", ()), self.args))
        declarations: dict[str, _Declaration] = {}
        for klass in _declaring_classes(origin):
            for declaration in _class_declarations(klass):
                declarations[declaration.name] = declaration
        for declaration in declarations.values():
            annotation = _substitute(declaration.resolve(), bindings)
            prop = Property.declared(declaration.name, annotation)
            if prop is not None:
                yield prop

    def __repr__(self) -> str:
        return f"TypeDescriptor({_type_repr(self.annotation)})"


@dataclass(frozen=True)
class Property:
    """One declared property of an object type."""

    name: str
    type: TypeDescriptor
    metadata: tuple[Any, ...] = ()

    @classmethod
    def declared(cls, name: str, annotation: Any) -> Optional[Property]:
        if get_origin(annotation) is ClassVar or annotation is ClassVar:
            return None
        td = TypeDescriptor.of(annotation)
        return cls(name=name, type=td, metadata=td.metadata)

    def has_marker(self, *marker_types: type) -> bool:
        return any(
            isinstance(item, marker_types) or item in marker_types for item in self.metadata
        )

    def find_marker(self, marker_type: type) -> Any:
        for item in self.metadata:
            if isinstance(item, marker_type):
                return item
        return None


def _declaring_classes(cls: type) -> list[type]:
    """MRO from the most basic class down, minus universal bases."""
    return [
        klass
        for klass in reversed(cls.__mro__)
        if klass not in _UNIVERSAL_BASES and klass.__module__ not in ("builtins", "typing")
    ]


@dataclass(frozen=True)
class _Declaration:
    """A property annotation, evaluated on first use."""

    name: str
    resolver: Callable[[], Any] = field(compare=False, repr=False)

    def resolve(self) -> Any:
        return self.resolver()


def _class_declarations(klass: type) -> Iterator[_Declaration]:
    """Annotated attributes, then typed properties, declared directly on klass."""
    own = {
        name: annotation
        for name, annotation in inspect.get_annotations(klass).items()
        if not name.startswith("_")
    }
    try:
        hints = get_type_hints(klass, include_extras=True)
    except Exception:
        # resolve one by one so the names before a bad annotation still resolve
        hints = None

    for name, annotation in own.items():
        if hints is not None:
            yield _Declaration(name, partial(hints.__getitem__, name))
        else:
            yield _Declaration(name, partial(_attribute_hint, klass, name, annotation))

    for name, member in vars(klass).items():
        if name.startswith("_") or not isinstance(member, property) or member.fget is None:
            continue
        if "return" not in inspect.get_annotations(member.fget):
            continue
        yield _Declaration(name, partial(_return_hint, klass, member.fget))


def _namespace(klass: type, globalns: dict[str, Any]) -> dict[str, Any]:
    """Class members and the class itself, shadowed by the module globals."""
    return {**vars(klass), klass.__name__: klass, **globalns}


def _attribute_hint(klass: type, name: str, annotation: Any) -> Any:
    module = sys.modules.get(klass.__module__)
    namespace = _namespace(klass, vars(module) if module is not None else {})
    holder = type(klass.__name__, (), {"__annotations__": {name: annotation}, "__module__": klass.__module__})
    return get_type_hints(holder, globalns=namespace, include_extras=True)[name]


def _return_hint(klass: type, fget: Callable[..., Any]) -> Any:
    namespace = _namespace(klass, getattr(fget, "__globals__", {}))
    return get_type_hints(fget, globalns=namespace, include_extras=True)["return"]


def _type_repr(annotation: Any) -> str:
    if _is_class(annotation) and not get_args(annotation):
        return annotation.__qualname__
    return repr(annotation)


# =============================================================================
# Generic argument resolution
# =============================================================================


def resolve_generic_arguments(cls: type, target: type) -> Optional[tuple[Any, ...]]:
    """Return the type arguments bound to ``target``'s parameters, seen from ``cls``.

    Walks the declared (``__orig_bases__``) ancestry of ``cls``, substituting
    type variable bindings at each step, so a concrete class that fixes the
    arguments through an intermediate generic ancestor resolves correctly.
    Unbound parameters come back as TypeVars. Returns None when ``target``
    is not an ancestor.

    Example:
        class Base(RestAction[M, Page]): ...
        class ListUsers(Base[UserQuery]): ...

        resolve_generic_arguments(ListUsers, RestAction)  # (UserQuery, Page)
    """
    return _resolve_bases(cls, target, {})


def _resolve_bases(
    cls: type, target: type, bindings: dict[Any, Any]
) -> Optional[tuple[Any, ...]]:
    bases = cls.__dict__.get("__orig_bases__", cls.__bases__)
    for base in bases:
        origin = get_origin(base) or base
        if not _is_class(origin) or origin is Generic:
            continue
        args = tuple(_substitute(arg, bindings) for arg in get_args(base))
        if origin is target:
            return args if args else tuple(getattr(target, "__parameters__", ()))
        if not issubclass(origin, target):
            continue
        parameters = getattr(origin, "__parameters__", ())
        found = _resolve_bases(origin, target, dict(zip(parameters, args)))
        if found is not None:
            return found
    return None


def _substitute(arg: Any, bindings: dict[Any, Any]) -> Any:
    if isinstance(arg, TypeVar):
        return bindings.get(arg, arg)
    parameters = getattr(arg, "__parameters__", ())
    if parameters and not _is_class(arg):
        replacement = tuple(bindings.get(p, p) for p in parameters)
        if replacement != tuple(parameters):
            return arg[replacement if len(replacement) > 1 else replacement[0]]
    return arg


def is_unbound(arg: Any) -> bool:
    """True for a TypeVar or a generic alias that still has free type variables."""
    if isinstance(arg, TypeVar):
        return True
    return bool(getattr(arg, "__parameters__", ())) and not _is_class(arg)


__all__ = [
    "FLOATING_TYPES",
    "Property",
    "STRING_LIKE_TYPES",
    "TypeDescriptor",
    "is_unbound",
    "resolve_generic_arguments",
]
