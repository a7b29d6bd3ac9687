"""
Treeline utilities (internal helpers shared by the token, converter and input layers)

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided" when None is a meaningful value.
  • Falsey, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; None/0/""/[] are kept as they are.

- ordinal(number)
  • Position wording for messages ("first", "second", ..., "11th", "22nd").

- pluralize(word, count)
  • Pick the singular or the plural form of a message noun.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> ordinal(3)
    'third'
    >>> pluralize("argument", 2)
    'arguments'
"""
import functools
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
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


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns
    - object, if object is not Unset.
    - default, if object is Unset.

    Examples
    - coalesce("set", "fallback") -> "set"
    - coalesce(Unset, "fallback") -> "fallback"
    - coalesce(None, "fallback")  -> None
    """
    return object if object is not Unset else default


_WORDS = {
    1: "first",
    2: "second",
    3: "third",
    4: "fourth",
    5: "fifth",
    6: "sixth",
    7: "seventh",
    8: "eighth",
    9: "ninth",
    10: "tenth",
}


def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes ("11th", "21st", "102nd").
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError("ordinal() argument must be an integer")
    if number < 1:
        raise ValueError("ordinal() argument must be a positive integer")
    try:
        return _WORDS[number]
    except KeyError:
        pass
    # 11th, 12th, 13th (and 111th, 112th, 113th, ...)
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


@functools.cache
def pluralize(word, count=2, /):
    """
    Pick the form of a message noun that agrees with count.

    Only the nouns used in treeline's messages need handling, so the rules are
    the short regular ones (s/sh/ch/x/z → +es, consonant+y → -ies, else +s).
    Uppercase words stay uppercase.
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() argument must be a string")
    if count == 1 or not word:
        return word
    lower = word.lower()
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = lower + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = lower[:-1] + "ies"
    else:
        plural = lower + "s"
    return plural.upper() if word.isupper() else plural


Unset = UnsetType()
"""
Internal sentinel for "not provided".

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish "no input" from "explicitly passed None".
"""


__all__ = (
    # Functions
    "coalesce",
    "ordinal",
    "pluralize",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
