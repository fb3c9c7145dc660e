"""
Lazy ranges: a uniform view over integer intervals, cursor pairs and
arbitrary Python iterables.

Ranges are created with ``range()``, which picks the representation matching
its argument. A range never copies its source: it only knows how to produce a
``begin()`` and an ``end()`` cursor over it. Transformations (see
``combinators``) wrap those cursors and are chained either with methods or
with the pipe operator::

    evens = range([0, 1, 2, 3, 4]).filter(lambda x: x % 2 == 0)
    evens = range([0, 1, 2, 3, 4]) | filter(lambda x: x % 2 == 0)

A range built from an object borrows it: the object must outlive the range,
and writes through cursors of a mutable sequence reach the object. A range
built with ``owned=True`` is the only handle on its source and is read-only.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import MutableSequence
from itertools import zip_longest
from numbers import Integral

from cursors import Cursor, InputCursor, IntegerCursor, SequenceCursor, StepCursor, distance
from models import Ownership, Tier
from utils import (
    RangeCapabilityError,
    is_container,
    is_cursor,
    is_iterable,
    is_range,
    normalize_index,
    register_range,
    require_tier,
    tier_of_iterable,
)

logger = logging.getLogger(__name__)


def range_empty(r) -> bool:
    """Default emptiness test derived from begin() and end()."""
    return r.begin() == r.end()


def range_size(r) -> int:
    """Default size derived from the distance between begin() and end()."""
    return distance(r.begin(), r.end())


class Range(ABC):
    """
    Base interface for every range.

    Subclasses provide ``begin()`` and ``end()`` and set ``tier`` and
    ``cursor_type``; they may override ``empty()`` and ``size()`` when they
    know better than walking from begin to end.
    """

    tier = Tier.INPUT
    cursor_type = Cursor
    ownership = Ownership.BORROWED

    @abstractmethod
    def begin(self):
        pass

    @abstractmethod
    def end(self):
        pass

    def empty(self) -> bool:
        return range_empty(self)

    def size(self) -> int:
        return range_size(self)

    # --------- python protocols ----------
    def __iter__(self):
        cursor, last = self.begin(), self.end()
        while cursor != last:
            yield cursor.value
            cursor = cursor.next()

    def __reversed__(self):
        require_tier(self, Tier.BIDIRECTIONAL, "reversed()")
        return self._walk_back()

    def _walk_back(self):
        first, cursor = self.begin(), self.end()
        while cursor != first:
            cursor = cursor.prev()
            yield cursor.value

    def __len__(self):
        # list() asks for len() before iterating; sizing a single-pass range
        # would consume it.
        if self.tier == Tier.INPUT:
            raise TypeError(f"{type(self).__name__} over a single-pass source has no len()")
        return self.size()

    def __bool__(self):
        return not self.empty()

    def __getitem__(self, key):
        if isinstance(key, slice):
            if key.step is not None:
                raise ValueError("range slicing does not support a step")
            size = None
            if key.start is None or key.stop is None:
                size = self.size()
            start = 0 if key.start is None else key.start
            stop = size if key.stop is None else key.stop
            return self.slice(start, stop)
        require_tier(self, Tier.RANDOM_ACCESS, "indexing")
        size = self.size()
        position = normalize_index(key, size)
        if not 0 <= position < size:
            raise IndexError(f"range index out of range: {key}")
        return self.begin()[position]

    def __eq__(self, other):
        if not is_iterable(other):
            return NotImplemented
        missing = object()
        return all(a == b for a, b in zip_longest(self, other, fillvalue=missing))

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}(tier={self.tier.name}, ownership={self.ownership.value})"

    # --------- element access ----------
    def front(self):
        """First element"""
        first = self.begin()
        assert first != self.end(), "front() of an empty range"
        return first.value

    def back(self):
        """Last element"""
        require_tier(self, Tier.BIDIRECTIONAL, "back()")
        last = self.end()
        assert last != self.begin(), "back() of an empty range"
        return last.prev().value

    def to_list(self):
        return [item for item in self]

    # --------- chainable combinators (lazy) ----------
    def pop_front(self, n=1):
        import combinators
        return combinators.pop_front(self, n)

    def pop_back(self, n=1):
        import combinators
        return combinators.pop_back(self, n)

    def slice(self, start, stop):
        import combinators
        return combinators.slice(self, start, stop)

    def reverse(self):
        import combinators
        return combinators.reverse(self)

    def indexed(self):
        import combinators
        return combinators.indexed(self)

    def filter(self, predicate):
        import combinators
        return combinators.filter(self, predicate)

    def map(self, function):
        import combinators
        return combinators.map(self, function)


@register_range
class IteratorPair(Range):
    """Most basic range: a pair of cursors of the same type."""

    def __init__(self, first, last):
        if not (is_cursor(first) and is_cursor(last)):
            raise RangeCapabilityError("IteratorPair requires two cursors")
        if type(first) is not type(last):
            raise RangeCapabilityError(
                f"IteratorPair requires matching cursors, got "
                f"{type(first).__name__} and {type(last).__name__}"
            )
        self._first = first
        self._last = last
        self.tier = first.tier
        self.cursor_type = type(first)

    def begin(self):
        return self._first

    def end(self):
        return self._last


@register_range
class Iterable(Range):
    """
    View over an arbitrary Python iterable.

    The cursor class follows the tier of the source: indexable sequences get
    random-access cursors, reversible sized objects bidirectional ones, other
    re-iterable objects forward ones and iterators single-pass ones.
    """

    def __init__(self, source, owned=False):
        if not is_iterable(source):
            raise RangeCapabilityError(f"{type(source).__name__} is not iterable")
        self._source = source
        self.ownership = Ownership.OWNED if owned else Ownership.BORROWED
        self.tier = tier_of_iterable(source)
        self._writable = not owned and isinstance(source, MutableSequence)
        if self.tier == Tier.RANDOM_ACCESS:
            self.cursor_type = SequenceCursor
        elif self.tier == Tier.INPUT:
            self.cursor_type = InputCursor
            self._first, self._last = InputCursor.over(source)
        else:
            self.cursor_type = StepCursor

    def begin(self):
        if self.tier == Tier.RANDOM_ACCESS:
            return SequenceCursor(self._source, 0, self._writable)
        if self.tier == Tier.INPUT:
            return self._first
        return StepCursor(self._source, 0, self.tier)

    def end(self):
        if self.tier == Tier.RANDOM_ACCESS:
            return SequenceCursor(self._source, len(self._source), self._writable)
        if self.tier == Tier.INPUT:
            return self._last
        return StepCursor(self._source, None, self.tier)


@register_range
class Container(Iterable):
    """Iterable view over a sized object; size and emptiness come from len()."""

    def __init__(self, source, owned=False):
        if not is_container(source):
            raise RangeCapabilityError(f"{type(source).__name__} is not a sized iterable")
        super().__init__(source, owned)

    def empty(self) -> bool:
        return len(self._source) == 0

    def size(self) -> int:
        return len(self._source)


def range(*args, owned=False):
    """
    Build a range from its arguments.

    - ``range(to)`` / ``range(start, to)``: integers in ``[start, to)``.
    - ``range(first, last)``: two cursors of the same type.
    - ``range(r)``: an existing range is returned unchanged.
    - ``range(obj)``: a view over a sized or plain iterable. The view borrows
      ``obj`` unless ``owned=True``, which makes it read-only.
    """
    if len(args) == 2:
        first, last = args
        if isinstance(first, Integral) and isinstance(last, Integral):
            assert first <= last, f"range({first}, {last}): start must not exceed stop"
            result = IteratorPair(IntegerCursor(int(first)), IntegerCursor(int(last)))
        elif is_cursor(first) and is_cursor(last):
            result = IteratorPair(first, last)
        else:
            raise RangeCapabilityError(
                f"range() cannot pair {type(first).__name__} with {type(last).__name__}"
            )
    elif len(args) == 1:
        (source,) = args
        if isinstance(source, Integral):
            return range(0, source)
        if is_range(source):
            if owned and source.ownership != Ownership.OWNED:
                raise RangeCapabilityError(
                    f"range(owned=True) cannot take ownership of a borrowed {type(source).__name__}"
                )
            return source
        if is_container(source):
            result = Container(source, owned)
        elif is_iterable(source):
            result = Iterable(source, owned)
        else:
            raise RangeCapabilityError(f"range() cannot iterate over {type(source).__name__}")
    else:
        raise TypeError(f"range() takes 1 or 2 positional arguments ({len(args)} given)")

    logger.debug(f"range(): built {result!r} with {result.cursor_type.__name__}")
    return result
