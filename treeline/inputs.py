"""
Treeline command input: a command name plus typed, sequential argument access.

What this module provides
- Input: the input of one command invocation. Like a C main()'s argv, element 0
  is the command name and the remaining elements are the arguments. Arguments
  are read one at a time and converted on the fly:
      name = input.read()            # str
      width = input.read(int)
      shown = input.read(bool, True) # "toggle" flips True
      where = input >> Direction     # same as input.read(Direction)
- Output: the sink command handlers write their answers to (a rich Console).
- invoke(handler, prompt): build an Input, run handler(input, output) and surface
  any fault through trigger().

Consumption policy
- Reading never rolls back: a fault in the third read leaves the first two
  consumed. Handlers must treat any fault as an aborted invocation.
- Leftover arguments are ignored unless the caller asks for strictness with
  finish(), or by using the Input as a context manager (invoke() does).

Quick start
    from treeline import Input, invoke

    def resize(input, output):
        attribute = input.read()
        value = input.read(int)
        output.print("%s=%d" % (attribute, value))

    invoke(resize, "set width 800", shell=True)
"""
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .converters import converter
from .faults import *
from .tokens import TokenSequence
from .utils import *

logger = logging.getLogger(__name__)

# Types for I/O with the user
Output = Console


class Input:
    """
    The input of a command: its name (argv[0]) and its arguments (argv[1:]).

    The name and the arguments are kept apart; the arguments live in their own
    TokenSequence whose cursor starts at the first argument.
    """
    __slots__ = ("_command", "_arguments")

    def __init__(self, argv=(), /):
        # a TokenSequence contributes every token, whatever its cursor
        if isinstance(argv, TokenSequence | Iterable) and not isinstance(argv, str):
            tokens = tuple(argv)
        else:
            raise TypeError("Input() argument must be a token sequence or an iterable of strings")
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("Input() argument must be a token sequence or an iterable of strings")
        self._command = tokens[0] if tokens else Unset
        self._arguments = TokenSequence(tokens[1:])

    @classmethod
    def parse(cls, prompt=Unset, /):
        """
        Build an Input from a raw prompt.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:] (the first one names the command).
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, taken verbatim.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        """
        if prompt is Unset:
            return cls(sys.argv[1:])
        if isinstance(prompt, str):
            return cls(shlex.split(prompt))
        if isinstance(prompt, Iterable):
            return cls(prompt)
        raise TypeError("parse() argument must be a string or an iterable of strings")

    @property
    def command(self):
        """the command name; EmptyCommandError when the input has no tokens."""
        if self._command is Unset:
            raise EmptyCommandError(
                "no command given",
                title="empty command",
                code=FaultCode.EMPTY_COMMAND,
                hint="start the input with a command name (for example: set width 800)",
                docs=getdoc(FaultCode.EMPTY_COMMAND),
            )
        return self._command

    @property
    def arguments(self):
        """every argument token, consumed or not."""
        return tuple(self._arguments)

    @property
    def remaining(self):
        """argument tokens not read yet."""
        return self._arguments.remaining

    def read(self, kind=str, /, relative=None):
        """
        Read the next argument and convert it.

        Parameters
        - kind: a value type with a registered converter (str, int, Unsigned,
          bool, Direction) or a Converter subclass. Defaults to str.
        - relative: the value to read the token against (e.g., the current value
          for "toggle"); None when there is no such context.

        Raises
        - ExhaustedError: no argument left.
        - InvalidArgumentError / OutOfRangeError: the argument does not convert;
          the message names its position and the command.
        """
        strategy = converter(kind)
        position = self._arguments.consumed + 1
        command = coalesce(self._command, "")
        try:
            token = self._arguments.shift()
        except ExhaustedError as fault:
            raise ExhaustedError(
                "missing argument at %s position of %r" % (ordinal(position), command),
                **{
                    **fault.options,
                    "title": "missing argument",
                    "hint": "'%s' expects more arguments" % command,
                    "command": command,
                },
            ) from None
        try:
            return strategy.parse(token, relative)
        except CommandException as fault:
            logger.debug("argument %r of %r failed to convert: %s", token, command, fault)
            raise type(fault)(
                "%s at %s position of %r" % (fault.message, ordinal(position), command),
                **{**fault.options, "index": position, "command": command},
            ) from None

    def __rshift__(self, kind):
        if not isinstance(kind, type):
            return NotImplemented
        return self.read(kind)

    def finish(self):
        """
        Strict completion check: fail when arguments were left unread.

        Raises
        - UnparsedTokensError: listing the leftover tokens.
        """
        if leftover := self.remaining:
            command = coalesce(self._command, "")
            raise UnparsedTokensError(
                "unparsed %s %s after %r" % (
                    pluralize("argument", len(leftover)), " ".join(map(repr, leftover)), command
                ),
                title="unparsed input",
                code=FaultCode.UNPARSED_TOKENS,
                hint="remove the extra %s" % pluralize("input", len(leftover)),
                leftover=leftover,
                command=command,
                docs=getdoc(FaultCode.UNPARSED_TOKENS),
            )

    def __enter__(self):
        return self

    def __exit__(self, kind, value, traceback):
        if kind is None:
            self.finish()
        return False

    def __repr__(self):
        return "Input(%r)" % ([self._command, *self._arguments] if self._command is not Unset else [])

    def __rich_repr__(self):
        yield "command", self._command
        yield "arguments", list(self._arguments)
        yield "remaining", list(self.remaining)


def invoke(handler, prompt=Unset, /, *, output=Unset, **options):
    """
    Run a command handler over a prompt.

    Parameters
    - handler: callable taking (input, output).
    - prompt: anything Input.parse() accepts (Unset reads sys.argv[1:]).
    - output: the Output handed to the handler (default: a stdout Console).
    - options: forwarded to trigger() when a fault occurs (shell, fancy,
      colorful, deferred, prog ...).

    Behavior
    - Arguments left unread by the handler are a fault (strict policy).
    - Without shell=True, faults propagate as exceptions. In shell mode they are
      rendered on stderr, then the process exits with status 1 unless deferred.

    Returns
    - The handler's result, or None when a fault was rendered in deferred mode.
    """
    if not callable(handler):
        raise TypeError("invoke() first argument must be callable")
    input = Input.parse(prompt)
    if output is Unset:
        output = Console()
    try:
        with input:
            return handler(input, output)
    except CommandException as fault:
        trigger(fault, **options)


__all__ = (
    "Input",
    "Output",
    "invoke",
)
