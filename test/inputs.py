"""
Inputs module behavioral tests (command name, typed reads, strictness, invoke).

Scope
- Validate the command/arguments split and EmptyCommandError.
- Validate typed sequential reads, exhaustion, and positioned conversion faults.
- Validate the strict completion policy (finish() and the context manager).
- Validate prompt normalization and the invoke() runner in raise and shell modes.

Conventions
- Test method names follow CamelCase per project convention.
- Shell-mode rendering is captured by swapping the faults console for an in-memory one.
"""
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from treeline import (
    Input,
    TokenSequence,
    Direction,
    Unsigned,
    BooleanConverter,
    UnsignedConverter,
    invoke,
    EmptyCommandError,
    ExhaustedError,
    InvalidArgumentError,
    OutOfRangeError,
    UnparsedTokensError,
    FaultCode,
)
from treeline import faults


class TestInputCommand(TestCase):
    """Behavioral tests for Input construction and the command name."""

    def testCommandIsFirstToken(self):
        input = Input(["set", "width", "800"])
        self.assertEqual(input.command, "set")
        self.assertEqual(input.arguments, ("width", "800"))

    def testCommandDoesNotConsume(self):
        input = Input(["set", "width"])
        self.assertEqual(input.command, "set")
        self.assertEqual(input.command, "set")
        self.assertEqual(input.read(), "width")

    def testEmptyCommand(self):
        input = Input([])
        with self.assertRaises(EmptyCommandError) as context:
            input.command
        self.assertIsInstance(context.exception, LookupError)
        self.assertIs(context.exception.options["code"], FaultCode.EMPTY_COMMAND)

    def testEmptyInputHasNoArguments(self):
        input = Input()
        self.assertEqual(input.arguments, ())
        with self.assertRaises(ExhaustedError):
            input.read()

    def testCommandWithoutArguments(self):
        input = Input(["quit"])
        self.assertEqual(input.command, "quit")
        self.assertEqual(input.arguments, ())
        with self.assertRaises(ExhaustedError):
            input.read()

    def testFromTokenSequence(self):
        tokens = TokenSequence(["set", "width", "800"])
        tokens.shift()
        input = Input(tokens)
        self.assertEqual(input.command, "set")
        self.assertEqual(input.arguments, ("width", "800"))

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            Input(["set", 800])
        with self.assertRaises(TypeError):
            Input("set width 800")


class TestInputRead(TestCase):
    """Behavioral tests for typed argument reads."""

    def testTypedSequence(self):
        input = Input(["set", "width", "800"])
        self.assertEqual(input.command, "set")
        self.assertEqual(input.read(), "width")
        self.assertEqual(input.read(int), 800)
        with self.assertRaises(ExhaustedError) as context:
            input.read()
        self.assertIn("third position", str(context.exception))
        self.assertIn("'set'", str(context.exception))
        self.assertEqual(context.exception.options["command"], "set")

    def testShiftOperator(self):
        input = Input(["move", "left", "3"])
        self.assertIs(input >> Direction, Direction.LEFT)
        value = input >> Unsigned
        self.assertIsInstance(value, Unsigned)
        self.assertEqual(value, 3)

    def testShiftOperatorNeedsType(self):
        with self.assertRaises(TypeError):
            Input(["move", "left"]) >> "direction"

    def testRelativeBoolean(self):
        input = Input(["set", "toggle", "toggle"])
        self.assertIs(input.read(bool, True), False)
        with self.assertRaises(InvalidArgumentError):
            input.read(bool)

    def testConverterSubclassAsKind(self):
        input = Input(["set", "on"])
        self.assertIs(input.read(BooleanConverter), True)

    def testConversionFaultIsPositioned(self):
        input = Input(["set", "width", "8x0"])
        input.read()
        with self.assertRaises(InvalidArgumentError) as context:
            input.read(int)
        fault = context.exception
        self.assertIn("'8x0'", str(fault))
        self.assertIn("second position", str(fault))
        self.assertIn("'set'", str(fault))
        self.assertEqual(fault.options["index"], 2)
        self.assertEqual(fault.options["command"], "set")
        self.assertEqual(fault.options["token"], "8x0")

    def testOutOfRangeKeepsItsKind(self):
        input = Input(["set", "99999999999999999999"])
        with self.assertRaises(OutOfRangeError):
            input.read(int)

    def testNoRollback(self):
        input = Input(["set", "width", "wide", "extra"])
        self.assertEqual(input.read(), "width")
        with self.assertRaises(InvalidArgumentError):
            input.read(int)
        self.assertEqual(input.remaining, ("extra",))

    def testUnknownKindDoesNotConsume(self):
        input = Input(["set", "1.5"])
        with self.assertRaises(TypeError):
            input.read(float)
        self.assertEqual(input.remaining, ("1.5",))

    def testTrailingTokensIgnoredByDefault(self):
        input = Input(["set", "width", "800"])
        self.assertEqual(input.read(), "width")
        self.assertEqual(input.remaining, ("800",))


class TestInputStrictness(TestCase):
    """Behavioral tests for the strict completion check."""

    def testFinishWithLeftover(self):
        input = Input(["set", "width", "800"])
        input.read()
        with self.assertRaises(UnparsedTokensError) as context:
            input.finish()
        self.assertEqual(context.exception.options["leftover"], ("800",))
        self.assertIn("'800'", str(context.exception))

    def testFinishWhenConsumed(self):
        input = Input(["set", "width"])
        input.read()
        self.assertIsNone(input.finish())

    def testContextManagerChecksOnExit(self):
        with self.assertRaises(UnparsedTokensError):
            with Input(["set", "width", "800"]) as input:
                input.read()

    def testContextManagerKeepsHandlerFaults(self):
        with self.assertRaises(InvalidArgumentError):
            with Input(["set", "width", "800"]) as input:
                input.read(int)


class TestInputParse(TestCase):
    """Behavioral tests for Input.parse prompt normalization."""

    def testShellLikeString(self):
        input = Input.parse("set 'window title' on")
        self.assertEqual(input.command, "set")
        self.assertEqual(input.arguments, ("window title", "on"))

    def testIterableTakenVerbatim(self):
        input = Input.parse(["set", " padded "])
        self.assertEqual(input.arguments, (" padded ",))

    def testDefaultsToArgv(self):
        with mock.patch.object(sys, "argv", ["treeline", "set", "width", "800"]):
            input = Input.parse()
        self.assertEqual(input.command, "set")
        self.assertEqual(input.arguments, ("width", "800"))

    def testRejectsOtherPrompts(self):
        with self.assertRaises(TypeError):
            Input.parse(800)

    def testRepr(self):
        self.assertEqual(repr(Input(["set", "width"])), "Input(['set', 'width'])")
        self.assertEqual(repr(Input()), "Input([])")


class TestInvoke(TestCase):
    """Behavioral tests for invoke() (handler runs and fault reporting)."""

    def setUp(self):
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, width=120, color_system=None)

    def testHandlerResult(self):
        def resize(input, output):
            return input.read(), input.read(int)

        self.assertEqual(invoke(resize, "set width 800"), ("width", 800))

    def testOutputIsHandedOver(self):
        def hello(input, output):
            output.print("hello %s" % input.read())

        invoke(hello, ["hello", "world"], output=self.console)
        self.assertIn("hello world", self.buffer.getvalue())

    def testLeftoverRaises(self):
        def resize(input, output):
            return input.read()

        with self.assertRaises(UnparsedTokensError):
            invoke(resize, "set width 800")

    def testFaultRaisedOutsideShell(self):
        def resize(input, output):
            return input.read(int)

        with self.assertRaises(InvalidArgumentError):
            invoke(resize, "set wide")

    def testShellDeferredRendersFault(self):
        def resize(input, output):
            return input.read(int)

        with mock.patch.object(faults, "console", self.console):
            result = invoke(resize, "set wide", shell=True, deferred=True)
        self.assertIsNone(result)
        rendered = self.buffer.getvalue()
        self.assertIn("Invalid Integer", rendered)
        self.assertIn("'wide'", rendered)

    def testShellDeferredRendersHugeUnsigned(self):
        def assign(input, output):
            return input.read(UnsignedConverter)

        with mock.patch.object(faults, "console", self.console):
            result = invoke(assign, ["set", "1" * 5000], shell=True, deferred=True)
        self.assertIsNone(result)
        rendered = self.buffer.getvalue()
        self.assertIn("Integer Out Of Range", rendered)

    def testGivenOutputSkipsDefaultConsole(self):
        def hello(input, output):
            return output

        with mock.patch("treeline.inputs.Console") as factory:
            self.assertIs(invoke(hello, ["hello"], output=self.console), self.console)
        factory.assert_not_called()

    def testShellExits(self):
        def quit(input, output):
            return input.command

        with mock.patch.object(faults, "console", self.console):
            with self.assertRaises(SystemExit) as context:
                invoke(quit, [], shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("no command given", self.buffer.getvalue())

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            invoke("set", "set width 800")


if __name__ == "__main__":
    unittest.main()
