"""
Range combinators.

Every combinator wraps a range without copying it and can be called in two
equivalent ways::

    pop_front(r, 2)         # direct
    r | pop_front(2)        # deferred: pop_front(2) returns a tag

Left operands that are plain iterables are wrapped with ``range()`` first.
Adaptor ranges take their input range by reference; the input is never
modified.
"""

import logging
import sys
from numbers import Integral
from typing import Any, Callable

from pydantic import Field

from cursors import Cursor, advance
from lazy import Range, range as make_range
from models import DeferredTag, IndexedValue, Tier
from utils import normalize_index, register_range, require_tier

logger = logging.getLogger(__name__)

# Index reported by the end cursor of an indexed range; never meaningful.
END_INDEX = sys.maxsize


class _Adaptor(Range):
    """Range built on top of another range, inheriting its properties."""

    def __init__(self, inner):
        self._inner = make_range(inner)
        self.tier = self._inner.tier
        self.cursor_type = self._inner.cursor_type
        self.ownership = self._inner.ownership
        logger.debug(f"{type(self).__name__}: adapting {self._inner!r}")

    @property
    def inner(self):
        return self._inner


def nth_from_end(r, n):
    """Cursor n steps before r.end()."""
    if r.tier >= Tier.BIDIRECTIONAL:
        return advance(r.end(), -n)
    # Forward-only: one pass to size the range, another to reach the cursor.
    return advance(r.begin(), r.size() - n)


# ---------------------------------------------------------------------------
# Pop front / pop back / slice
# ---------------------------------------------------------------------------

@register_range
class PopFrontRange(_Adaptor):
    """Input range without its first n elements."""

    def __init__(self, inner, n=1):
        super().__init__(inner)
        require_tier(self._inner, Tier.FORWARD, "pop_front")
        assert n >= 0, f"pop_front({n}): count must not be negative"
        assert n <= self._inner.size(), f"pop_front({n}): count exceeds range size"
        self._n = n

    def begin(self):
        return advance(self._inner.begin(), self._n)

    def end(self):
        return self._inner.end()

    def size(self):
        return self._inner.size() - self._n


@register_range
class PopBackRange(_Adaptor):
    """
    Input range without its last n elements.

    The end cursor is found by stepping back from the input's end when the
    input is bidirectional; forward-only inputs are sized first (a full pass)
    and walked from the front.
    """

    def __init__(self, inner, n=1):
        super().__init__(inner)
        require_tier(self._inner, Tier.FORWARD, "pop_back")
        assert n >= 0, f"pop_back({n}): count must not be negative"
        assert n <= self._inner.size(), f"pop_back({n}): count exceeds range size"
        self._n = n

    def begin(self):
        return self._inner.begin()

    def end(self):
        return nth_from_end(self._inner, self._n)

    def size(self):
        return self._inner.size() - self._n


@register_range
class SliceRange(_Adaptor):
    """Python-like slice [start, stop) of the input; negative indices count from the end."""

    def __init__(self, inner, start, stop):
        super().__init__(inner)
        require_tier(self._inner, Tier.FORWARD, "slice")
        size = self._inner.size()
        first, last = normalize_index(start, size), normalize_index(stop, size)
        assert first >= 0, f"slice({start}, {stop}): start before the first element"
        assert first <= last, f"slice({start}, {stop}): start after stop"
        assert last <= size, f"slice({start}, {stop}): stop past the end"
        self._first = first
        self._last = last

    def begin(self):
        return advance(self._inner.begin(), self._first)

    def end(self):
        return advance(self._inner.begin(), self._last)

    def size(self):
        return self._last - self._first


# ---------------------------------------------------------------------------
# Reverse
# ---------------------------------------------------------------------------

class ReverseCursor(Cursor):
    """Cursor walking its base backwards; reads the element before the base."""

    def __init__(self, base):
        self._base = base
        self.tier = base.tier

    @property
    def base(self):
        return self._base

    def _read(self):
        return self._base.prev().value

    def _write(self, item):
        self._base.prev().value = item

    def next(self):
        return ReverseCursor(self._base.prev())

    def _retreat(self):
        return ReverseCursor(self._base.next())

    def _jump(self, n):
        return ReverseCursor(self._base - n)

    def _offset_from(self, other):
        return other._base - self._base

    def __eq__(self, other):
        if not isinstance(other, ReverseCursor):
            return NotImplemented
        return self._base == other._base

    def __repr__(self):
        return f"ReverseCursor({self._base!r})"


@register_range
class ReverseRange(_Adaptor):
    """Input range in reverse order."""

    def __init__(self, inner):
        super().__init__(inner)
        require_tier(self._inner, Tier.BIDIRECTIONAL, "reverse")
        self.cursor_type = ReverseCursor

    def begin(self):
        return ReverseCursor(self._inner.end())

    def end(self):
        return ReverseCursor(self._inner.begin())

    def empty(self):
        return self._inner.empty()

    def size(self):
        return self._inner.size()


# ---------------------------------------------------------------------------
# Indexed
# ---------------------------------------------------------------------------

class IndexedCursor(Cursor):
    """
    Cursor yielding IndexedValue(index, element).

    The index moves in lockstep with the base cursor. Equality only looks at
    the base position.
    """

    def __init__(self, base, index):
        self._base = base
        self._index = index
        self.tier = base.tier

    @property
    def base(self):
        return self._base

    def _read(self):
        return IndexedValue(self._index, self._base.value)

    def next(self):
        return IndexedCursor(self._base.next(), self._index + 1)

    def _retreat(self):
        return IndexedCursor(self._base.prev(), self._index - 1)

    def _jump(self, n):
        return IndexedCursor(self._base + n, self._index + n)

    def _offset_from(self, other):
        return self._base - other._base

    def __eq__(self, other):
        if not isinstance(other, IndexedCursor):
            return NotImplemented
        return self._base == other._base

    def __repr__(self):
        return f"IndexedCursor({self._base!r}, index={self._index})"


@register_range
class IndexedRange(_Adaptor):
    """Input range decorated with the position of each element, starting at 0."""

    def __init__(self, inner):
        super().__init__(inner)
        self.cursor_type = IndexedCursor

    def begin(self):
        return IndexedCursor(self._inner.begin(), 0)

    def end(self):
        return IndexedCursor(self._inner.end(), END_INDEX)

    def empty(self):
        return self._inner.empty()

    def size(self):
        return self._inner.size()


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------

class FilterCursor(Cursor):
    """Cursor skipping the elements rejected by its range's predicate."""

    def __init__(self, base, owner):
        self._base = base
        self._owner = owner
        self.tier = owner.tier

    @property
    def base(self):
        return self._base

    def _read(self):
        return self._base.value

    def _write(self, item):
        self._base.value = item

    def next(self):
        return FilterCursor(self._owner._next_after(self._base), self._owner)

    def _retreat(self):
        return FilterCursor(self._owner._previous_before(self._base), self._owner)

    def __eq__(self, other):
        if not isinstance(other, FilterCursor):
            return NotImplemented
        return self._base == other._base

    def __repr__(self):
        return f"FilterCursor({self._base!r})"


@register_range
class FilterRange(_Adaptor):
    """
    Elements of the input range satisfying a predicate.

    Cursors are at most bidirectional. The predicate is called again on every
    traversal, so it must be pure.
    """

    def __init__(self, inner, predicate):
        super().__init__(inner)
        if not callable(predicate):
            raise TypeError(f"filter predicate must be callable, got {type(predicate).__name__}")
        self._predicate = predicate
        self.tier = min(self._inner.tier, Tier.BIDIRECTIONAL)
        self.cursor_type = FilterCursor

    def _first_match(self, cursor):
        last = self._inner.end()
        while cursor != last and not self._predicate(cursor.value):
            cursor = cursor.next()
        return cursor

    def _next_after(self, cursor):
        if cursor == self._inner.end():
            return cursor
        return self._first_match(cursor.next())

    def _previous_before(self, cursor):
        first = self._inner.begin()
        assert cursor != first, "cannot step before the first element"
        cursor = cursor.prev()
        while not self._predicate(cursor.value):
            assert cursor != first, "no element before this position satisfies the predicate"
            cursor = cursor.prev()
        return cursor

    def begin(self):
        return FilterCursor(self._first_match(self._inner.begin()), self)

    def end(self):
        return FilterCursor(self._inner.end(), self)


# ---------------------------------------------------------------------------
# Map
# ---------------------------------------------------------------------------

class MapCursor(Cursor):
    """Cursor applying its range's function to the base element on every read."""

    def __init__(self, base, owner):
        self._base = base
        self._owner = owner
        self.tier = base.tier

    @property
    def base(self):
        return self._base

    def _read(self):
        return self._owner._function(self._base.value)

    def next(self):
        return MapCursor(self._base.next(), self._owner)

    def _retreat(self):
        return MapCursor(self._base.prev(), self._owner)

    def _jump(self, n):
        return MapCursor(self._base + n, self._owner)

    def _offset_from(self, other):
        return self._base - other._base

    def __eq__(self, other):
        if not isinstance(other, MapCursor):
            return NotImplemented
        return self._base == other._base

    def __repr__(self):
        return f"MapCursor({self._base!r})"


@register_range
class MapRange(_Adaptor):
    """Input range with a function applied lazily to each element."""

    def __init__(self, inner, function):
        super().__init__(inner)
        if not callable(function):
            raise TypeError(f"map function must be callable, got {type(function).__name__}")
        self._function = function
        self.cursor_type = MapCursor

    def begin(self):
        return MapCursor(self._inner.begin(), self)

    def end(self):
        return MapCursor(self._inner.end(), self)

    def empty(self):
        return self._inner.empty()

    def size(self):
        return self._inner.size()


# ---------------------------------------------------------------------------
# Deferred tags
# ---------------------------------------------------------------------------

class PopFrontTag(DeferredTag):
    """Deferred pop_front"""
    n: int = Field(1, description="Number of elements dropped from the front")

    def apply(self, source):
        return PopFrontRange(source, self.n)


class PopBackTag(DeferredTag):
    """Deferred pop_back"""
    n: int = Field(1, description="Number of elements dropped from the back")

    def apply(self, source):
        return PopBackRange(source, self.n)


class SliceTag(DeferredTag):
    """Deferred slice"""
    start: int = Field(..., description="First index, negative counts from the end")
    stop: int = Field(..., description="Index past the last element, negative counts from the end")

    def apply(self, source):
        return SliceRange(source, self.start, self.stop)


class ReverseTag(DeferredTag):
    """Deferred reverse"""

    def apply(self, source):
        return ReverseRange(source)


class IndexedTag(DeferredTag):
    """Deferred indexed"""

    def apply(self, source):
        return IndexedRange(source)


class FilterTag(DeferredTag):
    """Deferred filter"""
    predicate: Callable[[Any], Any] = Field(..., description="Elements are kept when this returns true")

    def apply(self, source):
        return FilterRange(source, self.predicate)


class MapTag(DeferredTag):
    """Deferred map"""
    function: Callable[[Any], Any] = Field(..., description="Function applied to each element")

    def apply(self, source):
        return MapRange(source, self.function)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def _arity_error(name, expected, args):
    return TypeError(f"{name}() takes {expected} positional arguments ({len(args)} given)")


def pop_front(*args):
    """pop_front(r, n=1) drops the first n elements; pop_front(n=1) returns a tag."""
    if not args or (len(args) == 1 and isinstance(args[0], Integral)):
        return PopFrontTag(n=args[0] if args else 1)
    if len(args) > 2:
        raise _arity_error("pop_front", "0 to 2", args)
    return PopFrontRange(*args)


def pop_back(*args):
    """pop_back(r, n=1) drops the last n elements; pop_back(n=1) returns a tag."""
    if not args or (len(args) == 1 and isinstance(args[0], Integral)):
        return PopBackTag(n=args[0] if args else 1)
    if len(args) > 2:
        raise _arity_error("pop_back", "0 to 2", args)
    return PopBackRange(*args)


def slice(*args):
    """slice(r, start, stop) or slice(start, stop) -> tag."""
    if len(args) == 2:
        return SliceTag(start=args[0], stop=args[1])
    if len(args) == 3:
        return SliceRange(*args)
    raise _arity_error("slice", "2 or 3", args)


def reverse(*args):
    """reverse(r) or reverse() -> tag."""
    if not args:
        return ReverseTag()
    if len(args) == 1:
        return ReverseRange(args[0])
    raise _arity_error("reverse", "0 or 1", args)


def indexed(*args):
    """indexed(r) or indexed() -> tag."""
    if not args:
        return IndexedTag()
    if len(args) == 1:
        return IndexedRange(args[0])
    raise _arity_error("indexed", "0 or 1", args)


def filter(*args):
    """filter(r, predicate) or filter(predicate) -> tag."""
    if len(args) == 1:
        return FilterTag(predicate=args[0])
    if len(args) == 2:
        return FilterRange(*args)
    raise _arity_error("filter", "1 or 2", args)


def map(*args):
    """map(r, function) or map(function) -> tag."""
    if len(args) == 1:
        return MapTag(function=args[0])
    if len(args) == 2:
        return MapRange(*args)
    raise _arity_error("map", "1 or 2", args)
