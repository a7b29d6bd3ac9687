"""
Treeline token sequences (argument lists and object-tree paths).

Overview
- TokenSequence: an ordered, read-only tuple of string tokens plus a consumption
  cursor. It backs both command arguments and object-tree paths.
  • Non-destructive access: len(), indexing (bounds-checked), slicing, iteration.
  • Sequential extraction: shift() hands out the next token and advances the cursor.
  • Equality is positional and exact over the tokens; the cursor is not compared.
- Path: the same type, used for dotted object-tree paths
  (TokenSequence.split("clients.focus.title")).

Faults
- TokenIndexError when indexing out of range.
- ExhaustedError when shift()/peek() find no token left.

Quick example:
    >>> path = Path.split("tags.by-name.default")
    >>> path.shift(), path.remaining
    ('tags', ('by-name', 'default'))
"""
import logging
from collections.abc import Iterable

from .faults import ExhaustedError, TokenIndexError, FaultCode, getdoc
from .utils import ordinal, pluralize

logger = logging.getLogger(__name__)


class TokenSequence:
    """
    Ordered tokens with a cursor for sequential extraction.

    Contents are fixed at construction; extraction only moves the cursor, so
    indexed access always sees every token regardless of what was consumed.
    Instances are meant to be confined to a single command invocation.
    """
    __slots__ = ("_tokens", "_cursor")

    def __init__(self, tokens=(), /):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("TokenSequence() argument must be an iterable of strings")
        tokens = tuple(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("TokenSequence() argument must be an iterable of strings")
        self._tokens = tokens
        self._cursor = 0

    @classmethod
    def split(cls, source, /, delimiter="."):
        """
        Build a sequence from a raw delimited string (e.g., an object-tree path).

        An empty source yields an empty sequence (the root path); every other
        segment, empty ones included, is kept so join() restores the source.
        """
        if not isinstance(source, str):
            raise TypeError("split() argument must be a string")
        if not isinstance(delimiter, str) or not delimiter:
            raise ValueError("split() delimiter must be a non-empty string")
        return cls(source.split(delimiter) if source else ())

    def join(self, delimiter="."):
        """
        Inverse of split(): glue every token back with the delimiter.
        """
        return delimiter.join(self._tokens)

    @property
    def consumed(self):
        """number of tokens already handed out by shift()."""
        return self._cursor

    @property
    def remaining(self):
        """tokens not yet handed out by shift()."""
        return self._tokens[self._cursor:]

    def peek(self):
        """
        Return the next token without advancing the cursor.
        """
        if self._cursor >= len(self._tokens):
            raise self._exhausted()
        return self._tokens[self._cursor]

    def shift(self):
        """
        Return the next token and advance the cursor.

        Raises ExhaustedError when every token was already consumed.
        """
        token = self.peek()
        self._cursor += 1
        logger.debug("shifted token %r (%d of %d)", token, self._cursor, len(self._tokens))
        return token

    def _exhausted(self):
        position = self._cursor + 1
        return ExhaustedError(
            "no token left at %s position" % ordinal(position),
            title="no more tokens",
            code=FaultCode.EXHAUSTED_TOKENS,
            hint="add the missing token after %r" % self._tokens[-1] if self._tokens else "add the missing token",
            index=position,
            docs=getdoc(FaultCode.EXHAUSTED_TOKENS),
        )

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(self._tokens[index])
        try:
            return self._tokens[index]
        except IndexError:
            raise TokenIndexError(
                "token index %d is out of range for %d %s" % (
                    index, len(self._tokens), pluralize("token", len(self._tokens))
                ),
                title="token index out of range",
                code=FaultCode.TOKEN_INDEX,
                hint="use an index between 0 and %d" % (len(self._tokens) - 1) if self._tokens else "the sequence is empty",
                index=index,
                docs=getdoc(FaultCode.TOKEN_INDEX),
            ) from None
        except TypeError:
            raise TypeError("token indices must be integers or slices, not %s" % type(index).__name__) from None

    def __iter__(self):
        return iter(self._tokens)

    def __eq__(self, other):
        if isinstance(other, TokenSequence):
            return self._tokens == other._tokens
        if isinstance(other, (tuple, list)):
            return self._tokens == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._tokens)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, list(self._tokens))

    def __rich_repr__(self):
        yield "tokens", list(self._tokens)
        yield "consumed", self._cursor


# A path in the object tree
Path = TokenSequence


__all__ = (
    "TokenSequence",
    "Path",
)
