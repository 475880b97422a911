r"""
funcli argument descriptors and the options-bag marker.

Overview
- Descriptors
  • Positional: a parameter identified by position (name, required, default).
  • Option: a parameter identified by a `--name` token; value-taking or a boolean flag.

- Marker
  • Options: used as the default value of one positional parameter to declare the
    "options bag". The decoder injects a dict at that parameter's position: the
    declared defaults, overlaid by the option values supplied on the command line.

        def main(path, options=Options("out", verbose=False)):
            ...

    Bare names declare value-taking options without a default; keyword names declare
    options with a default, where the literal False marks a boolean flag.

- Introspection & representation
  • IntrospectableType (see funcli.utils) exposes the fields declared in
    __introspectable__ as read-only properties, with stable __repr__/__rich_repr__.

Validation highlights
- Names must match r"[A-Za-z0-9_]+" (the long-option grammar) and be unique.
- An Options marker cannot hold another one (the bag is flat).

Public API
- Classes: Positional, Option, Options
"""
import re
from collections.abc import Mapping

from .faults import DuplicateOptionsError
from .utils import *


def _sanitize_name(cls, name, /, *, switch=True):
    """
    Internal: validate a positional or option name and return it unchanged.

    Positional names only need to be printable in usage text; option names must
    also be typeable as `--name`, so they follow the long-option grammar.

    Raises
    - TypeError: when the name is not a string.
    - ValueError: when the name is empty or (for options) outside the grammar.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} names must be strings")
    if not name.strip():
        raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
    if switch and not re.fullmatch(r"[A-Za-z0-9_]+", name):
        raise ValueError(f"{cls.__typename__} names must be made of ASCII letters, digits or underscores")
    return name


class Positional(metaclass=IntrospectableType):
    """
    Positional parameter descriptor.

    Fields
    - name: str, the parameter name (also the key in Decoded.values).
    - required: bool, True when the parameter declares no default.
    - default: the value applied when an optional positional is omitted.
      Required positionals always carry None.
    """

    __introspectable__ = (
        "name",
        "required",
        "default",
    )

    def __init__(self, name, /, required=True, default=None):
        self._name = _sanitize_name(type(self), name, switch=False)
        self._required = bool(required)
        self._default = None if self._required else default


class Option(metaclass=IntrospectableType):
    """
    Named option descriptor.

    Fields
    - name: str, the option name as typed after `--`.
    - has_arg: bool, False for boolean flags (declared with the default False).
    - default: the value the options bag holds when the option is not supplied;
      Unset when the option has no default and stays absent from the bag.
    """

    __introspectable__ = (
        "name",
        "has_arg",
        "default",
    )

    def __init__(self, name, /, has_arg=True, default=Unset):
        self._name = _sanitize_name(type(self), name)
        self._has_arg = bool(has_arg)
        self._default = default



class Options(Mapping, metaclass=IntrospectableType):
    """
    Options-bag marker, used as a parameter default.

    Options is a read-only mapping of the declared defaults, so a callable
    invoked directly from Python (not through the CLI) still sees sensible
    values; options declared by bare name have no default and are absent.

    Construction
    - Options(*names, **defaults)
      • names: value-taking options without a default.
      • defaults: options with a default; a default of exactly False marks a flag.

    Introspection hook
    - __options__() returns the Option descriptors in declaration order
      (bare names first, then keyword names).

    Raises
    - TypeError / ValueError: invalid or duplicate names.
    - DuplicateOptionsError: an Options marker used as a default inside another one.
    """

    __introspectable__ = (
        "names",
        "defaults",
    )

    def __init__(self, *names, **defaults):
        seen = set()
        for name in (*names, *defaults):
            if _sanitize_name(type(self), name) in seen:
                raise ValueError(f"{type(self).__typename__} names cannot contain duplicates")
            seen.add(name)

        for object in defaults.values():
            if hasattr(object, "__options__"):
                raise DuplicateOptionsError()

        self._names = tuple(names)
        self._defaults = freeze(defaults)

    def __options__(self):
        """
        Introspection hook: describe the options this bag accepts.
        """
        return (
            *(Option(name) for name in self._names),
            *(
                Option(name, has_arg=object is not False, default=object)
                for name, object in self._defaults.items()
            ),
        )

    def __getitem__(self, key):
        return self._defaults[key]

    def __iter__(self):
        return iter(self._defaults)

    def __len__(self):
        return len(self._defaults)

    __eq__ = Mapping.__eq__
    __hash__ = None


__all__ = (
    "Positional",
    "Option",
    "Options",
)
