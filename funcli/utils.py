"""
funcli utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the arguments, schemas, parsing and commands
  layers so that every model object looks and behaves the same way.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated methods for clean tracebacks.

- freeze(object)
  • Shallow read-only snapshot of a container (tuple / MappingProxyType / frozenset).

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- IntrospectableType
  • Metaclass shared by every model object (descriptors, schemas, decoded results):
    mirrored read-only fields, stable __repr__/__rich_repr__ and structural equality.

- progname()
  • Program name used by the usage renderer when the caller does not provide one.

Stability and contract
- Names not in __all__ are internal and may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
import operator
import os.path
import re
import sys
from abc import ABCMeta
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case the default is
    returned. Falsey values like None, 0, "" or [] are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - @rename(name)          -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def freeze(object, /):
    """
    Return a shallow read-only snapshot of a container.

    Freezing rules
    - Sequence (non-string) → tuple(seq)
    - Mapping → MappingProxyType(dict(mapping))  # snapshot, insertion order kept
    - Set → frozenset(setlike)
    - Other types → returned as-is

    Nested containers are left untouched; model objects freeze their own fields.
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance. Owners are expected to store
    frozen values there (see freeze()), so the public view cannot be mutated.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


class IntrospectableType(ABCMeta):
    """
    Metaclass that turns plain classes into read-only, introspectable records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" attribute (see mirror()).
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and
      rich.pretty output.
    - Provide structural equality over the introspectable fields, so two
      records built from the same inputs compare equal.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used as the prefix of every configuration error message.
    - Hashing follows the fields: records holding mappings are unhashable.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with every introspectable field.

            Example
            - Positional(name='path', required=True, default=None)
            """
            return f"{type(self).__name__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        # Classes may keep their own equality (e.g., mapping semantics).
        if "__eq__" not in namespace:
            @rename("__eq__")
            def __eq__(self, other):
                if type(self) is not type(other):
                    return NotImplemented
                return dict(self.__rich_repr__()) == dict(other.__rich_repr__())
            self.__eq__ = __eq__

            @rename("__hash__")
            def __hash__(self):
                return hash((type(self), *(object for _, object in self.__rich_repr__())))
            self.__hash__ = __hash__

        return self


def progname():
    """
    Resolve the program name shown in usage text.

    Lookup order
    - __prog__ defined by the host application in __main__.
    - basename of sys.argv[0] (the script being run).
    - "script" when neither is available (interactive sessions, embedded use).
    """
    prog = getattr(sys.modules.get("__main__"), "__prog__", None)
    if isinstance(prog, str) and prog.strip():
        return prog.strip()
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0]) or "script"
    return "script"


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "freeze",
    "mirror",
    "IntrospectableType",
    "progname",
)
