"""Set of constructs shared by the rest of the package: stream readers for the tokenizer, and a couple of helpers for CSS's notion of ASCII case-insensitivity."""

import logging

from collections.abc import Iterable, Iterator, Sequence
from abc import abstractmethod
from typing import Protocol, runtime_checkable, TypeAlias, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)

CP: TypeAlias = str # A [Unicode] code point is a string of length 1; the empty string stands for the end-of-stream condition

@runtime_checkable
class Appender(Protocol[T_contra]):
    """Objects that elements can be appended to, e.g. lists.

    The parser only ever appends to the products it builds, so it asks for this narrower [contra-variant] interface rather than `list`, which lets a `list[Y]` be passed where `list[X]` is expected for any super-type `Y` of `X`.
    """
    @abstractmethod
    def append(self, x: T_contra) -> None:
        raise NotImplementedError

@runtime_checkable
class Reader(Protocol[T_co]):
    """Objects that vend items in batches, modeled after `read` on Python's own `io.IOBase`."""
    def read(self, size: int = -1, /) -> Sequence[T_co]:
        raise NotImplementedError

@runtime_checkable
class PeekingUnreadingReader(Reader[T], Protocol[T]):
    """Readers that also let the caller look ahead without consuming, and push consumed items back to the front of the stream.

    The tokenizer needs both: CSS tokenization routinely inspects up to three code points ahead ("would start an identifier") and "reconsumes" the current code point.
    """
    def peek(self, size: int, /) -> Sequence[T]:
        """Return up to `size` items that the next `read` would return, without consuming them; fewer items are returned near the end of the stream."""
        raise NotImplementedError
    def unread(self, items: Iterable[T]) -> None:
        """Insert `items` at the head of the stream, in order, so that the next `read` vends them first."""
        raise NotImplementedError

class IteratorReader(Reader[T]):
    """Adapts an iterator to the `Reader` protocol, so several items can be pulled with a single `read` call."""
    _source: Iterator[T]
    def __init__(self, source: Iterator[T]):
        self._source = source
    def read(self, size: int = -1, /) -> Sequence[T]:
        result: list[T] = []
        while len(result) != size:
            try:
                result.append(next(self._source))
            except StopIteration:
                break
        return result

class BufferedPeekingReader(PeekingUnreadingReader[T]):
    """Gives any `Reader` peeking and unreading capability by keeping a look-ahead buffer in front of it."""
    _source: Reader[T]
    _buffer: list[T]
    def __init__(self, source: Reader[T]):
        self._source = source
        self._buffer = []
    def peek(self, size: int, /) -> Sequence[T]:
        assert size >= 0 # Negative sizes ("read everything") are never needed by the tokenizer
        missing = size - len(self._buffer)
        if missing > 0:
            self._buffer.extend(self._source.read(missing))
        return self._buffer[:size]
    def read(self, size: int = -1, /) -> Sequence[T]:
        items = self.peek(size)
        del self._buffer[:size]
        return items
    def unread(self, items: Iterable[T]) -> None:
        self._buffer[:0] = items

def join(iterable: Iterable[str]) -> str:
    """Join a sequence of strings into one string."""
    return ''.join(iterable)

def ascii_lower(s: str) -> str:
    """Lowercase only the ASCII letters of a string.

    CSS keywords, units and property names are "ASCII case-insensitive" (http://infra.spec.whatwg.org/#ascii-case-insensitive), which differs from `str.lower` for some non-ASCII code points (e.g. the Kelvin sign).
    """
    return s.translate(_ASCII_LOWER)

_ASCII_LOWER = str.maketrans('ABCDEFGHIJKLMNOPQRSTUVWXYZ', 'abcdefghijklmnopqrstuvwxyz')

def eq_ignore_ascii_case(a: str, b: str) -> bool:
    return ascii_lower(a) == ascii_lower(b)

def parser_error(message: str = 'Parsing encountered an error') -> None:
    """The default handler of recoverable parse errors detected while tokenizing or building the component value tree.

    Such errors never interrupt parsing (CSS prescribes recovery for all of them), they are merely noted; errors that do cost a rule or a declaration are reported separately, through the diagnostics callback accepted by `flexcss.stylesheet`.
    """
    logger.debug(message)

def is_surrogate_code_point_ordinal(o: int) -> bool:
    """See `is_surrogate_code_point`."""
    return (0xd800 <= o <= 0xdbff) or (0xdc00 <= o <= 0xdfff)

def is_surrogate_code_point(cp: CP) -> bool:
    """See http://infra.spec.whatwg.org/#surrogate."""
    return is_surrogate_code_point_ordinal(ord(cp))
