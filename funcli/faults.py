"""
funcli faults (errors) and rendering.

Scope
- Fault: the canonical decode-time faults. They are non-fatal: the decoder
  records them and keeps walking the tokens, and the dispatcher reports the
  latest one together with the usage text.
- DuplicateOptionsError: configuration-time failure raised while introspecting
  a callable that declares more than one options bag.
- report(): render a fault message and the usage text to stderr.
- panic(): render the exception being handled to stderr (top-level catch-all).

UX goals
- Messages are short and stable, so scripts and tests can match on them.
- Styling is readable and configurable via __styles__ in __main__; colors are
  dropped automatically when stderr is not a terminal.

Integration
- All output goes through the module-level `console`. Tests swap it for a
  colorless Console writing to a buffer.
"""
from collections import defaultdict
from enum import StrEnum

from rich.console import Console
from rich.text import Text

console = Console(stderr=True)


class Fault(StrEnum):
    """
    canonical decode-time faults (stable messages).

    every member is a str equal to its message, so `decoded.error == "Unknown option"`
    holds and the value can be printed as-is.

    grouping
    - options: UNKNOWN_OPTION, OPTION_MISSING_VALUE, UNEXPECTED_FLAG_VALUE
    - positionals: TOO_MANY_ARGUMENTS, MISSING_REQUIRED_ARGUMENT
    - routing: COMMAND_NOT_FOUND
    """
    # --- options ---
    UNKNOWN_OPTION            = "Unknown option"
    OPTION_MISSING_VALUE      = "Option missing value"
    UNEXPECTED_FLAG_VALUE     = "Didn't expect value for flag argument"

    # --- positionals ---
    TOO_MANY_ARGUMENTS        = "Too many arguments"
    MISSING_REQUIRED_ARGUMENT = "Missing required argument"

    # --- routing ---
    COMMAND_NOT_FOUND         = "Command not found"


class DuplicateOptionsError(TypeError):
    """
    A callable declares a second options bag, or nests one inside another.
    """

    def __init__(self, message="Can't nest/repeat options", /):
        super().__init__(message)


def _styler():
    """
    return a style lookup merged with the host palette (__styles__ in __main__).
    """
    styles = defaultdict(str, {
        "error-label": "bold #FF4DA6",  # friendly pinky label
        "error-message": "#C8C8D0",  # soft light gray message
        "usage": "",  # plain; usage text is meant to be copied
    } | getattr(__import__("__main__"), "__styles__", {}))
    return styles.__getitem__


def report(message, usage, /):
    """
    write `error: <message>`, a blank line, then the usage text to stderr.

    contract
    - message: str (usually a Fault)
    - usage: str as produced by funcli.commands.usage()
    - fire-and-forget: nothing is returned and nothing is retried.
    """
    styler = _styler()
    console.print(
        Text.assemble(
            ("error", styler("error-label")),
            ": ",
            (str(message), styler("error-message")),
            "\n\n",
            (usage, styler("usage")),
            end="",
        ),
        end="",
        soft_wrap=True,
    )


def panic():
    """
    write the exception currently being handled to stderr.

    must be called from an `except` block; the traceback is rendered by rich.
    """
    console.print_exception()


__all__ = (
    "Fault",
    "DuplicateOptionsError",
    "console",
    "report",
    "panic",
)
