"""
Cursors: immutable positions inside a sequence.

A cursor plays the part of an iterator in the range engine. Reading is done
through the ``value`` property, stepping through ``next()`` / ``prev()``, which
return a new cursor and leave the original untouched. Random-access cursors
also support ``cursor + n``, ``cursor - n``, ``a - b`` and ordering.

What a cursor may do is fixed by its ``tier``; operations above that tier raise
RangeCapabilityError.
"""

import itertools
from abc import ABC, abstractmethod
from numbers import Integral

from models import Tier
from utils import ReadOnlyRangeError, require_tier


class Cursor(ABC):
    """Common cursor interface."""

    tier = Tier.INPUT

    # --------- element access ----------
    @property
    def value(self):
        return self._read()

    @value.setter
    def value(self, item):
        self._write(item)

    @abstractmethod
    def _read(self):
        pass

    def _write(self, item):
        raise ReadOnlyRangeError(f"{type(self).__name__} does not support assignment")

    # --------- stepping ----------
    @abstractmethod
    def next(self):
        pass

    def prev(self):
        require_tier(self, Tier.BIDIRECTIONAL, "prev()")
        return self._retreat()

    def _retreat(self):
        raise NotImplementedError

    @abstractmethod
    def __eq__(self, other):
        pass

    # --------- random access ----------
    def _jump(self, n):
        raise NotImplementedError

    def _offset_from(self, other):
        raise NotImplementedError

    def __add__(self, n):
        if not isinstance(n, Integral):
            return NotImplemented
        require_tier(self, Tier.RANDOM_ACCESS, "cursor arithmetic")
        return self._jump(int(n))

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Integral):
            require_tier(self, Tier.RANDOM_ACCESS, "cursor arithmetic")
            return self._jump(-int(other))
        if isinstance(other, Cursor):
            require_tier(self, Tier.RANDOM_ACCESS, "cursor distance")
            return self._offset_from(other)
        return NotImplemented

    def __getitem__(self, n):
        return (self + n).value

    def __lt__(self, other):
        return self - other < 0

    def __le__(self, other):
        return self - other <= 0

    def __gt__(self, other):
        return self - other > 0

    def __ge__(self, other):
        return self - other >= 0


def advance(cursor, n=1):
    """Cursor n steps away from `cursor`; negative n steps backwards."""
    if n == 0:
        return cursor
    if cursor.tier >= Tier.RANDOM_ACCESS:
        return cursor + n
    if n > 0:
        for _ in itertools.repeat(None, n):
            cursor = cursor.next()
    else:
        for _ in itertools.repeat(None, -n):
            cursor = cursor.prev()
    return cursor


def distance(first, last):
    """Number of steps from `first` to `last`."""
    if first.tier >= Tier.RANDOM_ACCESS:
        return last - first
    count = 0
    while first != last:
        first = first.next()
        count += 1
    return count


class IntegerCursor(Cursor):
    """Synthetic random-access cursor whose value is its position."""

    tier = Tier.RANDOM_ACCESS

    def __init__(self, n=0):
        self._n = n

    def _read(self):
        return self._n

    def next(self):
        return IntegerCursor(self._n + 1)

    def _retreat(self):
        return IntegerCursor(self._n - 1)

    def _jump(self, n):
        return IntegerCursor(self._n + n)

    def _offset_from(self, other):
        return self._n - other._n

    def __eq__(self, other):
        if not isinstance(other, IntegerCursor):
            return NotImplemented
        return self._n == other._n

    def __repr__(self):
        return f"IntegerCursor({self._n})"


class SequenceCursor(Cursor):
    """Random-access cursor over an indexable sequence."""

    tier = Tier.RANDOM_ACCESS

    def __init__(self, sequence, index=0, writable=False):
        self._sequence = sequence
        self._index = index
        self._writable = writable

    @property
    def index(self):
        return self._index

    def _read(self):
        return self._sequence[self._index]

    def _write(self, item):
        if not self._writable:
            super()._write(item)
        self._sequence[self._index] = item

    def _jump(self, n):
        return SequenceCursor(self._sequence, self._index + n, self._writable)

    def next(self):
        return self._jump(1)

    def _retreat(self):
        return self._jump(-1)

    def _offset_from(self, other):
        return self._index - other._index

    def __eq__(self, other):
        if not isinstance(other, SequenceCursor):
            return NotImplemented
        return self._sequence is other._sequence and self._index == other._index

    def __repr__(self):
        return f"SequenceCursor({type(self._sequence).__name__}, {self._index})"


class StepCursor(Cursor):
    """
    Multi-pass cursor over an object that hands out a fresh iterator on
    every ``iter()`` call (sets, dicts, custom iterables).

    Cursors derived from one another by ``next()`` share the underlying
    iterator through ``itertools.tee``, so walking a range costs a single
    pass over the source. A cursor built from scratch seeks from the front.

    ``prev()`` is only available on bidirectional cursors (reversible, sized
    sources) and re-seeks from the front: each backward step is O(n).
    """

    def __init__(self, source, index=0, tier=Tier.FORWARD, iterator=None):
        self._source = source
        self._index = index  # None marks the end position
        self.tier = tier
        self._iterator = iterator
        self._primed = False
        self._current = None
        self._exhausted = False

    def _prime(self):
        if self._primed:
            return
        if self._iterator is None:
            self._iterator = iter(self._source)
            next(itertools.islice(self._iterator, self._index, self._index), None)
        try:
            self._current = next(self._iterator)
        except StopIteration:
            self._exhausted = True
        self._primed = True

    def _at_end(self):
        if self._index is None:
            return True
        self._prime()
        return self._exhausted

    def _read(self):
        assert not self._at_end(), "cannot read the end cursor"
        return self._current

    def next(self):
        assert not self._at_end(), "cannot step past the end cursor"
        mine, theirs = itertools.tee(self._iterator)
        self._iterator = mine
        return StepCursor(self._source, self._index + 1, self.tier, theirs)

    def _retreat(self):
        index = len(self._source) if self._index is None else self._index
        assert index > 0, "cannot step before the first element"
        return StepCursor(self._source, index - 1, self.tier)

    def __eq__(self, other):
        if not isinstance(other, StepCursor):
            return NotImplemented
        if self._source is not other._source:
            return False
        if self._index is None or other._index is None:
            return self._at_end() and other._at_end()
        return self._index == other._index

    def __repr__(self):
        position = "end" if self._index is None else self._index
        return f"StepCursor({type(self._source).__name__}, {position})"


class _PullState:
    """Single-pass iterator shared by every InputCursor of one range."""

    def __init__(self, iterator):
        self.iterator = iterator
        self.position = -1
        self.current = None
        self.exhausted = False

    def seek(self, position):
        while self.position < position and not self.exhausted:
            try:
                self.current = next(self.iterator)
            except StopIteration:
                self.exhausted = True
            else:
                self.position += 1


class InputCursor(Cursor):
    """
    Single-pass cursor over an iterator.

    Reading a cursor pulls the source up to its position; once any copy has
    been read further along, older cursors are invalidated.
    """

    def __init__(self, state, position=0):
        self._state = state
        self._position = position  # None marks the end position

    @classmethod
    def over(cls, iterator):
        """Begin and end cursors sharing one pull state."""
        state = _PullState(iterator)
        return cls(state, 0), cls(state, None)

    def _at_end(self):
        if self._position is None:
            return True
        self._state.seek(self._position)
        return self._state.exhausted and self._state.position < self._position

    def _read(self):
        assert not self._at_end(), "cannot read the end cursor"
        assert self._state.position == self._position, \
            "input cursor invalidated: the source was read past this position"
        return self._state.current

    def next(self):
        assert not self._at_end(), "cannot step past the end cursor"
        return InputCursor(self._state, self._position + 1)

    def __eq__(self, other):
        if not isinstance(other, InputCursor):
            return NotImplemented
        if self._state is not other._state:
            return False
        if self._position is None or other._position is None:
            return self._at_end() and other._at_end()
        return self._position == other._position

    def __repr__(self):
        position = "end" if self._position is None else self._position
        return f"InputCursor({position})"
