r"""
Treeline converters: typed values from/to user text.

Overview
- Converter: stateless parse/format strategy for one value type.
  • parse(source, relative=None, /) -> value   (raises a fault on malformed input)
  • text(payload, /) -> str                     (canonical, user-facing rendering)
  Subclasses register for a value type through a class keyword:
      class BooleanConverter(Converter, type=bool): ...

- Specializations
  • IntegerConverter (int, 32-bit signed range)
  • UnsignedConverter (Unsigned, 64-bit unsigned range)
  • BooleanConverter (bool, with "toggle" relative to a previous value)
  • StringConverter (str, identity)
  • DirectionConverter (Direction, from the first character)

- converter(type): registry lookup (walks the type's MRO).

Relative parsing
- 'relative' is the value the token is read against (e.g., the current value of
  a setting). Only booleans use it: "toggle" negates it. It is read-only and
  None means "no context".

Faults
- InvalidArgumentError: the token is not a literal of the requested type.
- OutOfRangeError: the token is a well-formed integer outside the type's range.

Quick example:
    >>> converter(bool).parse("toggle", True)
    False
    >>> converter(Direction).parse("right")
    <Direction.RIGHT: 'right'>
    >>> converter(int).text(-7)
    '-7'
"""
import builtins
import logging
import re
from enum import Enum

from .faults import InvalidArgumentError, OutOfRangeError, FaultCode, getdoc
from .utils import Unset

logger = logging.getLogger(__name__)

# type -> converter class, filled by Converter.__init_subclass__
_registry = {}


class Direction(Enum):
    """Directions (used in frames, floating)."""
    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"


class Unsigned(int):
    """
    Marker type for unsigned integer payloads.

    Behaves as a plain int; it only exists so the registry can tell unsigned
    settings apart from signed ones.
    """
    __slots__ = ()

    def __repr__(self):
        return "Unsigned(%d)" % self


class Converter:
    """
    Base strategy: parse user text into a value and render a value as text.

    The default text() is str(); subclasses override parse() and, where the
    display form differs from str(), text().
    """
    type = Unset

    def __init_subclass__(cls, /, type=Unset, **options):
        super().__init_subclass__(**options)
        if type is not Unset:
            if type in _registry:
                raise TypeError("a converter for %r is already registered" % type)
            cls.type = type
            _registry[type] = cls

    def __new__(cls, *unused, **options):
        raise TypeError("converters are stateless; use %s.parse() and %s.text()" % (cls.__name__, cls.__name__))

    @classmethod
    def parse(cls, source, relative=None, /):
        raise NotImplementedError

    @classmethod
    def text(cls, payload, /):
        return str(payload)


_INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")


class IntegerConverter(Converter, type=int):
    """Signed integers, limited to the range of a 32-bit C int."""
    minimum = -2 ** 31
    maximum = 2 ** 31 - 1

    @classmethod
    def parse(cls, source, relative=None, /):
        if not isinstance(source, str):
            raise TypeError("parse() argument must be a string")
        if not _INTEGER.fullmatch(source):
            raise InvalidArgumentError(
                "invalid integer %r" % source,
                title="invalid integer",
                code=FaultCode.INVALID_ARGUMENT,
                hint="use base-10 digits with an optional sign (for example: 42 or -7)",
                token=source,
                docs=getdoc(FaultCode.INVALID_ARGUMENT),
            )
        # int() refuses very long digit strings; leading zeros count toward its limit
        stripped = source.strip()
        digits = stripped.lstrip("+-").lstrip("0")
        if len(digits) > len(str(max(-cls.minimum, cls.maximum))):
            raise cls._overflow(source)
        value = int(digits or "0")
        if stripped.startswith("-"):
            value = -value
        if not cls.minimum <= value <= cls.maximum:
            raise cls._overflow(source)
        return cls.type(value)

    @classmethod
    def _overflow(cls, source):
        shown = source if len(source) <= 32 else "%s...%s" % (source[:12], source[-12:])
        return OutOfRangeError(
            "integer %r is out of range [%d, %d]" % (shown, cls.minimum, cls.maximum),
            title="integer out of range",
            code=FaultCode.OUT_OF_RANGE,
            hint="use a value between %d and %d" % (cls.minimum, cls.maximum),
            token=source,
            docs=getdoc(FaultCode.OUT_OF_RANGE),
        )

    @classmethod
    def text(cls, payload, /):
        return str(int(payload))


class UnsignedConverter(IntegerConverter, type=Unsigned):
    """Unsigned integers, limited to the range of a 64-bit unsigned long."""
    minimum = 0
    maximum = 2 ** 64 - 1


class BooleanConverter(Converter, type=bool):
    """
    Booleans with permissive input and canonical output.

    input:  true/on/1, false/off/0, and toggle (relative to a previous value)
    output: exactly "true" or "false"
    """
    truthy = frozenset({"true", "on", "1"})
    falsy = frozenset({"false", "off", "0"})

    @classmethod
    def parse(cls, source, relative=None, /):
        if not isinstance(source, str):
            raise TypeError("parse() argument must be a string")
        if source in cls.falsy:
            return False
        if source in cls.truthy:
            return True
        if source == "toggle":
            if relative is None:
                raise InvalidArgumentError(
                    "toggle not allowed without context",
                    title="invalid boolean",
                    code=FaultCode.INVALID_ARGUMENT,
                    hint="use on/off/true/false; toggle needs a current value to flip",
                    token=source,
                    docs=getdoc(FaultCode.INVALID_ARGUMENT),
                )
            return not relative
        raise InvalidArgumentError(
            "invalid boolean %r: only %s are valid booleans" % (
                source, "on/off/true/false/toggle" if relative is not None else "on/off/true/false"
            ),
            title="invalid boolean",
            code=FaultCode.INVALID_ARGUMENT,
            hint="use one of on/off/true/false/1/0%s" % ("/toggle" if relative is not None else ""),
            token=source,
            docs=getdoc(FaultCode.INVALID_ARGUMENT),
        )

    @classmethod
    def text(cls, payload, /):
        return "true" if payload else "false"


class StringConverter(Converter, type=str):
    """Strings are taken and shown as they are."""

    @classmethod
    def parse(cls, source, relative=None, /):
        if not isinstance(source, str):
            raise TypeError("parse() argument must be a string")
        return source

    @classmethod
    def text(cls, payload, /):
        return payload


class DirectionConverter(Converter, type=Direction):
    """
    Directions from their first character: u(p), r(ight), d(own), l(eft).

    Only the first character is inspected, so "r", "right" and "rightwards" all
    read as Direction.RIGHT. Matching is case-sensitive.
    """
    mapping = {
        "u": Direction.UP,
        "r": Direction.RIGHT,
        "d": Direction.DOWN,
        "l": Direction.LEFT,
    }

    @classmethod
    def parse(cls, source, relative=None, /):
        if not isinstance(source, str):
            raise TypeError("parse() argument must be a string")
        if not source:
            raise InvalidArgumentError(
                "empty direction",
                title="invalid direction",
                code=FaultCode.INVALID_ARGUMENT,
                hint="use one of up/right/down/left (or u/r/d/l)",
                token=source,
                docs=getdoc(FaultCode.INVALID_ARGUMENT),
            )
        try:
            return cls.mapping[source[0]]
        except KeyError:
            raise InvalidArgumentError(
                "invalid direction %r" % source,
                title="invalid direction",
                code=FaultCode.INVALID_ARGUMENT,
                hint="use one of up/right/down/left (or u/r/d/l)",
                token=source,
                docs=getdoc(FaultCode.INVALID_ARGUMENT),
            ) from None

    @classmethod
    def text(cls, payload, /):
        return Direction(payload).value


def converter(type, /):
    """
    Return the converter registered for a value type.

    The lookup walks the type's MRO, so subclasses of a registered type use
    their base's converter unless they register their own (bool and Unsigned
    both subclass int and have their own converters).

    Raises
    - TypeError: when the argument is not a type or no converter matches.
    """
    if isinstance(type, builtins.type) and issubclass(type, Converter):
        return type
    if not isinstance(type, builtins.type):
        raise TypeError("converter() argument must be a type")
    for base in type.__mro__:
        try:
            return _registry[base]
        except KeyError:
            continue
    logger.debug("no converter registered for %r", type)
    raise TypeError("no converter registered for type %r" % type.__name__)


__all__ = (
    "Direction",
    "Unsigned",
    "Converter",
    "IntegerConverter",
    "UnsignedConverter",
    "BooleanConverter",
    "StringConverter",
    "DirectionConverter",
    "converter",
)
