"""Preprocessing of input to tokenization of CSS text, per http://drafts.csswg.org/css-syntax/#input-preprocessing."""

from ..utils import CP, is_surrogate_code_point

from collections.abc import Callable, Iterator
from typing import NamedTuple

class Location(NamedTuple):
    """A position in source text; both `line` and `column` are 1-based, and `column` counts code points of the original (unfiltered) text."""
    line: int
    column: int

class FilteredCodePoint(CP):
    """Class of code points that remember the original text they were filtered from, and where in the source that text started.

    E.g. '\\r\\n' is filtered into a single '\\n' whose `source` is '\\r\\n'. Keeping `source` makes filtering reversible so that the text of any token can be recovered verbatim, and keeping `location` lets errors point at the offending text.
    """
    source: CP
    location: Location
    def __new__(cls, *args, source: CP, location: Location = Location(0, 0), **kwargs):
        # `str` has no `__init__` to speak of, the value is fixed in `__new__`
        obj = super().__new__(cls, *args, **kwargs)
        assert len(obj) <= 1 # A code point, or the empty string at end of stream
        obj.source = source
        obj.location = location
        return obj

def filter_code_points(next: Callable[[], CP]) -> Iterator[FilteredCodePoint]:
    """See http://drafts.csswg.org/css-syntax/#css-filter-code-points.

    Also tracks the line and column of each code point; every filtered newline ('\\n', '\\r', '\\r\\n' or '\\f') starts a new line.
    """
    line, column = 1, 1
    cp = next()
    while cp:
        here = Location(line, column)
        match cp:
            case '\r':
                if (cp := next()) == '\n':
                    yield FilteredCodePoint('\n', source='\r\n', location=here)
                else:
                    yield FilteredCodePoint('\n', source='\r', location=here)
                    line, column = line + 1, 1
                    continue # `cp` already holds the code point following the carriage return
            case '\f':
                yield FilteredCodePoint('\n', source=cp, location=here)
            case _ if cp == '\0' or is_surrogate_code_point(cp):
                yield FilteredCodePoint('\uFFFD', source=cp, location=here)
            case _:
                yield FilteredCodePoint(cp, source=cp, location=here)
        if cp in ('\n', '\f'):
            line, column = line + 1, 1
        else:
            column += 1
        cp = next()
