"""
funcli schema layer: the immutable parsing contract of a callable or a command table.

What this module provides
- Schema: positional descriptors, an options map, the options-bag position and,
  for multi-command CLIs, a command table. Schemas are frozen on construction
  and can be shared by any number of decode passes.
- Command: a named entry of a command table (name + the command's own schema).

Builders
- Schema.from_callable(callback): signature-driven; reads inspect.signature and
  turns each parameter into a Positional, except the one whose default is an
  Options marker, which becomes the options bag.
- Schema.from_commands(handlers): wraps a mapping of name → callable into a
  schema with one required `command` positional and a command table.
- Schema(...): hand-written schemas are accepted as well, for callables whose
  signature cannot describe their CLI.

Quick start
    from funcli import Options, Schema

    def build(target, options=Options("jobs", verbose=False), mode="debug"):
        ...

    schema = Schema.from_callable(build)
    schema.option_index    # 1
    schema.positional      # (Positional(name='target', ...), Positional(name='mode', ...))
"""
import inspect
import logging
from collections.abc import Iterable, Mapping
from inspect import Parameter

from .arguments import Positional, Option
from .faults import DuplicateOptionsError
from .utils import *

logger = logging.getLogger("funcli")


def _sanitize_positional(cls, positional, /):
    """
    Internal: normalize positional descriptors into a tuple.
    """
    if not isinstance(positional, Iterable) or isinstance(positional, str):
        raise TypeError(f"{cls.__typename__} 'positional' must be an iterable of positionals")

    positional = tuple(positional)
    for descriptor in positional:
        if not isinstance(descriptor, Positional):
            raise TypeError(f"{cls.__typename__} 'positional' must be an iterable of positionals")
    return positional


def _sanitize_options(cls, options, /):
    """
    Internal: normalize options into a read-only name → Option mapping.

    Accepts a mapping keyed by option name or an iterable of Option descriptors.
    Declaration order is kept for rendering.
    """
    if isinstance(options, Mapping):
        for name, option in options.items():
            if not isinstance(option, Option):
                raise TypeError(f"{cls.__typename__} 'options' values must be options")
            if name != option.name:
                raise ValueError(f"{cls.__typename__} 'options' key {name!r} does not match option {option.name!r}")
        return freeze(options)

    if not isinstance(options, Iterable) or isinstance(options, str):
        raise TypeError(f"{cls.__typename__} 'options' must be a mapping or an iterable of options")

    mapping = {}
    for option in options:
        if not isinstance(option, Option):
            raise TypeError(f"{cls.__typename__} 'options' must be a mapping or an iterable of options")
        if option.name in mapping:
            raise ValueError(f"{cls.__typename__} option {option.name!r} is already in use")
        mapping[option.name] = option
    return freeze(mapping)


def _sanitize_commands(cls, commands, /):
    """
    Internal: normalize a command table into a read-only name → Command mapping.
    """
    if not isinstance(commands, Mapping):
        raise TypeError(f"{cls.__typename__} 'commands' must be a mapping")

    for name, command in commands.items():
        if not isinstance(command, Command):
            raise TypeError(f"{cls.__typename__} 'commands' values must be commands")
        if name != command.name:
            raise ValueError(f"{cls.__typename__} 'commands' key {name!r} does not match command {command.name!r}")
    return freeze(commands)


class Schema(metaclass=IntrospectableType):
    """
    Immutable parsing contract.

    Fields
    - option_index: int | None
      Position in the call argument list where the options bag is injected.
    - options: Mapping[str, Option]
      Known options, keyed by name (read-only view, declaration order).
    - positional: tuple[Positional, ...]
      Expected positionals, in call order.
    - commands: Mapping[str, Command] | None
      Command table; present only on multi-command schemas.

    Invariants (checked on construction)
    - 0 <= option_index <= len(positional) when set.
    - A command schema has exactly one required positional, no options and no
      options bag.
    """

    __introspectable__ = (
        "option_index",
        "options",
        "positional",
        "commands",
    )

    def __init__(self, positional=(), options=(), option_index=None, commands=None):
        self._positional = _sanitize_positional(type(self), positional)
        self._options = _sanitize_options(type(self), options)

        if option_index is not None:
            if not isinstance(option_index, int) or isinstance(option_index, bool):
                raise TypeError(f"{type(self).__typename__} 'option_index' must be an integer")
            if not 0 <= option_index <= len(self._positional):
                raise ValueError(f"{type(self).__typename__} 'option_index' must be between 0 and {len(self._positional)}")
        self._option_index = option_index

        if commands is not None:
            commands = _sanitize_commands(type(self), commands)
            if len(self._positional) != 1 or not self._positional[0].required:
                raise ValueError(f"{type(self).__typename__} with commands must declare a single required positional")
            if self._options or option_index is not None:
                raise ValueError(f"{type(self).__typename__} with commands cannot declare options")
        self._commands = commands

    @classmethod
    def from_callable(cls, callback, /):
        """
        Introspect a callable and build its schema.

        Rules
        - A parameter whose default provides __options__() is the options bag;
          option_index is the number of positionals declared before it.
        - Any other parameter is a positional, required when it has no default.
        - *args, **kwargs and keyword-only parameters cannot be expressed on the
          command line and are rejected.

        Errors
        - TypeError: non-callable callback or unsupported parameter kind.
        - ValueError: callable without an inspectable signature.
        - DuplicateOptionsError: more than one options bag.
        """
        try:
            signature = inspect.signature(callback)
        except TypeError:
            raise TypeError(f"{cls.__typename__} 'callback' must be callable") from None
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'callback' must be an inspectable callable") from None

        positional = []
        options = ()
        option_index = None

        for name, parameter in signature.parameters.items():
            if parameter.kind not in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD):
                raise TypeError(f"{cls.__typename__} 'callback' parameter {name!r} must be positional")

            default = parameter.default
            if hasattr(default, "__options__") and callable(default.__options__):
                if option_index is not None:
                    raise DuplicateOptionsError()
                option_index = len(positional)
                options = default.__options__()
            elif default is Parameter.empty:
                positional.append(Positional(name))
            else:
                positional.append(Positional(name, required=False, default=default))

        self = cls(positional, options, option_index)
        logger.debug("schema built for %s: %r", getattr(callback, "__qualname__", callback), self)
        return self

    @classmethod
    def from_commands(cls, handlers, /):
        """
        Build a multi-command schema from a mapping of name → callable.

        The resulting schema has one required positional named `command`, no
        options, and a command table holding each callable's own schema.
        Introspection failures of any handler propagate unchanged.
        """
        if not isinstance(handlers, Mapping):
            raise TypeError(f"{cls.__typename__} 'handlers' must be a mapping of names to callables")

        commands = {}
        for name, handler in handlers.items():
            if not isinstance(name, str):
                raise TypeError(f"{cls.__typename__} command names must be strings")
            commands[name] = Command(name, cls.from_callable(handler))

        return cls((Positional("command"),), commands=commands)


class Command(metaclass=IntrospectableType):
    """
    Command table entry.

    Fields
    - name: str, the token that selects the command.
    - schema: Schema, the command's own parsing contract.
    """

    __introspectable__ = (
        "name",
        "schema",
    )

    def __init__(self, name, schema, /):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        if not isinstance(schema, Schema):
            raise TypeError(f"{type(self).__typename__} 'schema' must be a schema")
        self._name = name
        self._schema = schema


__all__ = (
    "Schema",
    "Command",
)
