"""
funcli decoder: match a token sequence against a schema.

decode(schema, tokens) walks the tokens left to right and returns a Decoded
record holding every value, the ready-to-invoke argument list and the faults
seen on the way. Faults never stop the walk; each one is recorded and the next
token is processed.

Token grammar
- `--name` / `--name=value`: an option; name is [A-Za-z0-9_]+, the value is the
  rest of the line after the first '='. Anything else (including '-x' and a bare
  '--') is a positional token.

Sub-commands
- While the schema carries a command table, a positional token selects the
  command. The remaining tokens are then decoded against that command's schema
  (recursively) and the outer record keeps the inner one as `delegate`.
"""
import logging
import re
from collections import deque

from .faults import Fault
from .utils import *

logger = logging.getLogger("funcli")

_SWITCH = re.compile(r"--([A-Za-z0-9_]+)(?:=(.*))?")


class Decoded(metaclass=IntrospectableType):
    """
    Outcome of one decode pass.

    Fields
    - schema: Schema active when parsing ended (the command's when one was selected).
    - values: read-only mapping of every positional and option value, unknown
      options included under the typed name.
    - option_values: read-only mapping of the known options supplied on the
      command line (no defaults).
    - command: Command | None, the selected sub-command.
    - apply: tuple of call arguments, options bag included at its position.
    - errors: tuple of every Fault, in the order they were found.
    - delegate: Decoded | None, the sub-command's own decode result.

    `error` is the most recent fault, or None when decoding was clean.
    """

    __introspectable__ = (
        "schema",
        "values",
        "option_values",
        "command",
        "apply",
        "errors",
        "delegate",
    )

    def __init__(self, schema, values, option_values, command, apply, errors, delegate=None):
        self._schema = schema
        self._values = freeze(values)
        self._option_values = freeze(option_values)
        self._command = command
        self._apply = tuple(apply)
        self._errors = tuple(errors)
        self._delegate = delegate

    @property
    def error(self):
        return self._errors[-1] if self._errors else None


def _getvalue(schema, name, value, tokens, errors):
    """
    resolve the value of option `name`, consuming the next token when needed.

    - unknown option: fault, the inline value (or None) is kept.
    - value option: an absent or empty inline value takes the next token,
      whatever it looks like; none left (or empty) is a fault and gives None.
    - flag: always True; an inline value is a fault.
    """
    try:
        option = schema.options[name]
    except KeyError:
        errors.append(Fault.UNKNOWN_OPTION)
        return value

    if option.has_arg:
        if not value:
            value = tokens.popleft() if tokens else None
        if not value:
            errors.append(Fault.OPTION_MISSING_VALUE)
            value = None
        return value

    if value:
        errors.append(Fault.UNEXPECTED_FLAG_VALUE)
    return True


def decode(schema, tokens, /):
    """
    Decode `tokens` against `schema` and return a Decoded record.

    Parameters
    - schema: Schema
    - tokens: Iterable[str], consumed in order; the caller's sequence is not modified.

    Phases
    - walk: options are resolved as they come; positional tokens fill the declared
      positionals in order (or select a command on command schemas).
    - reconcile: unfilled required positionals are faults, unfilled optional ones
      contribute their default to the call arguments.
    - inject: a fresh options bag (declared defaults overlaid by the supplied
      values) is inserted at schema.option_index.

    Decoding is pure: equal inputs give equal records.
    """
    tokens = deque(tokens)
    cardinals = deque(schema.positional)
    values = {}
    option_values = {}
    apply = []
    errors = []
    command = None
    delegate = None

    while tokens:
        token = tokens.popleft()

        if match := _SWITCH.match(token):
            name, value = match.group(1, 2)
            values[name] = _getvalue(schema, name, value, tokens, errors)
            if name in schema.options:
                option_values[name] = values[name]
            continue

        try:
            descriptor = cardinals.popleft()
        except IndexError:
            descriptor = None
            errors.append(Fault.TOO_MANY_ARGUMENTS)

        if schema.commands is None:
            if descriptor is not None:
                apply.append(token)
                values[descriptor.name] = token
            continue

        # the command token itself is never applied nor recorded as a value
        command = schema.commands.get(token)
        if command is None:
            errors.append(Fault.COMMAND_NOT_FOUND)
            continue
        delegate = decode(command.schema, tokens)
        break

    if delegate is not None:
        return Decoded(
            delegate.schema,
            {**values, **delegate.values},
            {**option_values, **delegate.option_values},
            command,
            delegate.apply,
            (*errors, *delegate.errors),
            delegate,
        )

    for descriptor in cardinals:
        if descriptor.required:
            errors.append(Fault.MISSING_REQUIRED_ARGUMENT)
        else:
            apply.append(descriptor.default)

    if schema.option_index is not None:
        bag = {
            name: option.default
            for name, option in schema.options.items()
            if option.default is not Unset
        }
        apply.insert(schema.option_index, bag | option_values)

    if errors:
        logger.debug("decode ended with faults: %s", ", ".join(errors))

    return Decoded(schema, values, option_values, command, apply, errors)


__all__ = (
    "Decoded",
    "decode",
)
