"""
funcli command layer: render usage, dispatch decoded arguments, run a CLI.

What this module provides
- usage(schema, prog=...): plain-text usage block for a schema.
- apply(decoded, callback, prog=...): report the decode fault with usage, or
  call the callback with the decoded argument list.
- invoke(target, argv=...): the entry point. Builds the schema (from one
  callable or a mapping of command names to callables), decodes the tokens and
  dispatches, catching and printing any exception on the way.

Quick start
    from funcli import Options, invoke

    def copy(source, target, options=Options(force=False, mode="0644")):
        ...

    if __name__ == "__main__":
        invoke(copy)                          # single command, reads sys.argv[1:]
        invoke({"copy": copy, "move": move})  # sub-commands: `prog copy a b --force`

Design notes
- Faults are not exceptions: a bad command line prints `error: <message>` and
  the usage text to stderr, and the callback is never called.
- Anything that does raise (a bad signature, the callback itself) is printed
  as a rich traceback on stderr; invoke() never propagates it.
"""
import logging
import shlex
import sys
from collections.abc import Iterable, Mapping

from . import faults
from .parsing import decode
from .schemas import Schema
from .utils import *

logger = logging.getLogger("funcli")


def usage(schema, /, prog=Unset):
    """
    Render the usage block of a schema.

    Layout
        usage: <prog> [options] <required> [<optional>]

        options:
          --<flag>
          --<name>=<value>

        commands:
          <name>

    - `[options]` and the options section appear only when the schema has options.
    - the commands section appears only on command schemas.
    - every section ends with a blank line.

    Parameters
    - schema: Schema
    - prog: Unset | str, program name; resolved via progname() when Unset.
    """
    if not isinstance(prog := coalesce(prog, progname()), str):
        raise TypeError("usage() 'prog' must be a string")

    head = ["usage:", prog]
    if schema.options:
        head.append("[options]")
    for descriptor in schema.positional:
        head.append(descriptor.name if descriptor.required else "[%s]" % descriptor.name)

    lines = [" ".join(head), ""]

    if schema.options:
        lines.append("options:")
        for option in schema.options.values():
            lines.append("  --%s%s" % (option.name, "=<value>" if option.has_arg else ""))
        lines.append("")

    if schema.commands is not None:
        lines.append("commands:")
        for name in schema.commands:
            lines.append("  %s" % name)
        lines.append("")

    return "\n".join(lines) + "\n"


def apply(decoded, callback, /, prog=Unset):
    """
    Act on a decode result.

    Behavior
    - decoded.error set: write the fault and the usage of decoded.schema to
      stderr; the callback is not called (it may be None).
    - otherwise: call callback(*decoded.apply). A missing callback at this point
      is a caller bug and raises TypeError.

    Returns None; the callback's own return value is discarded.
    """
    if decoded.error:
        faults.report(decoded.error, usage(decoded.schema, prog=prog))
        return

    if not callable(callback):
        raise TypeError("apply() callback must be callable when decoding succeeded")

    logger.debug("calling %s with %r", getattr(callback, "__qualname__", callback), decoded.apply)
    callback(*decoded.apply)


def _tokenize(argv):
    """
    Normalize the argv parameter of invoke() into a list of tokens.

    - Unset: sys.argv[1:] (drops the program name).
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: used as-is, every element must be a string.
    """
    if argv is Unset:
        return sys.argv[1:]
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("invoke() argv must be a string or an iterable of strings")
        return tokens
    raise TypeError("invoke() argv must be a string or an iterable of strings")


def invoke(target, argv=Unset, /, *, schema=Unset, prog=Unset):
    """
    Parse a command line for a callable (or a command table) and run it.

    Parameters
    - target: Callable | Mapping[str, Callable]
      • a callable: its signature defines the command line.
      • a mapping: each key is a sub-command name, selected by the first
        positional token; the matching callable is run.
    - argv: Unset | str | Iterable[str]
      Tokens to parse; defaults to sys.argv[1:].
    - schema: Unset | Schema (keyword-only)
      Hand-written schema for a single callable, used instead of introspection.
    - prog: Unset | str (keyword-only)
      Program name used in usage text.

    Behavior
    - Returns None. Outcomes are observed through the callback's side effects
      or through stderr.
    - Every Exception raised while building the schema, decoding or running the
      callback is printed to stderr and swallowed.
    """
    try:
        tokens = _tokenize(argv)

        if isinstance(target, Mapping):
            if schema is not Unset:
                raise TypeError("invoke() 'schema' cannot be combined with a command mapping")
            decoded = decode(Schema.from_commands(target), tokens)
            callback = target[decoded.command.name] if decoded.command else None
        elif callable(target):
            if schema is Unset:
                schema = Schema.from_callable(target)
            elif not isinstance(schema, Schema):
                raise TypeError("invoke() 'schema' must be a schema")
            decoded = decode(schema, tokens)
            callback = target
        else:
            raise TypeError("invoke() first argument must be a callable or a mapping of callables")

        apply(decoded, callback, prog=prog)
    except Exception:
        faults.panic()


__all__ = (
    "usage",
    "apply",
    "invoke",
)
