"""
Treeline faults (user-facing input errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every input fault.
  Codes are grouped by layer (commands, token sequences, converters) so logs
  and searches stay predictable.
- CommandException: base type that carries message + options and knows how to
  render itself for an interactive user.
- trigger(): central entry point to surface a fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Token-first messages: every conversion message quotes the offending token,
  and input extraction adds its position ("at second position of 'set'").
- Short titles, one-sentence bodies, a single clear hint.
- Readable styling (configurable via __styles__ in __main__).

Integration
- Converters and inputs raise faults directly (fail fast, no recovery).
- The command dispatcher catches CommandException and calls trigger(fault, **ctx).
- In non-shell mode, faults are raised; in shell mode, they are rendered via rich.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across treeline (stable identifiers).

    grouping (by layer)
    - commands (2110x)
      • EMPTY_COMMAND
    - token sequences (2111x)
      • EXHAUSTED_TOKENS, TOKEN_INDEX, UNPARSED_TOKENS
    - converters (2112x)
      • INVALID_ARGUMENT, OUT_OF_RANGE
    """
    # --- command errors (21xxx) ---
    EMPTY_COMMAND    = 21101

    # --- token sequence errors (21xxx) ---
    EXHAUSTED_TOKENS = 21111
    TOKEN_INDEX      = 21112
    UNPARSED_TOKENS  = 21113

    # --- conversion errors (21xxx) ---
    INVALID_ARGUMENT = 21121
    OUT_OF_RANGE     = 21122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base type for every treeline input fault.

    a fault keeps its message and a read-only mapping of options; the options
    describe the fault (title, code, hint, token, index, docs ...) and how it is
    surfaced (shell, fancy, colorful, deferred).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        options = defaultdict(lambda: False, self.options)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if options["colorful"] else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "treeline")), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(str(self.options.get("title", "input error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self, styler("error-message"))
        parts = [message]
        if self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if options["fancy"]:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidArgumentError(CommandException, ValueError): ...
class OutOfRangeError(CommandException, ValueError): ...
class ExhaustedError(CommandException, LookupError): ...
class TokenIndexError(CommandException, IndexError): ...
class EmptyCommandError(CommandException, LookupError): ...
class UnparsedTokensError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful, deferred, and any context the reporter may want to
      show (e.g., prog/command/index).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when no entry exists.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "InvalidArgumentError",
    "OutOfRangeError",
    "ExhaustedError",
    "TokenIndexError",
    "EmptyCommandError",
    "UnparsedTokensError",
    "FaultCode",
    "trigger",
    "getdoc",
)
