"""
Tests for range construction, classification and the range trait registry.
"""

import pytest
from pydantic import ValidationError

import combinators  # noqa: F401  registers the adaptor ranges
from cursors import InputCursor, IntegerCursor, SequenceCursor, StepCursor
from helpers import ForwardList, Stream
from lazy import Container, Iterable, IteratorPair, range
from models import Ownership, Tier
from utils import (
    RANGE_REGISTRY,
    RangeCapabilityError,
    ReadOnlyRangeError,
    is_container,
    is_cursor,
    is_iterable,
    is_range,
    range_traits,
    tier_of_iterable,
)


class TestClassifier:
    """Test the capability predicates"""

    def test_is_cursor(self):
        assert is_cursor(IntegerCursor(0))
        assert not is_cursor(5)
        assert not is_cursor(iter([]))

    def test_is_iterable(self):
        assert is_iterable([])
        assert is_iterable(iter([]))
        assert is_iterable(Stream())
        assert not is_iterable(5)

    def test_is_container(self):
        assert is_container([])
        assert is_container(ForwardList())
        assert not is_container(Stream())
        assert not is_container(x for x in [])

    def test_is_range(self):
        assert is_range(range(3))
        assert is_range(range([1]))
        assert not is_range([1])
        assert not is_range(IntegerCursor(0))

    def test_classification_does_not_consume(self):
        """Test that classifying an iterator leaves it untouched"""
        it = iter([1, 2])
        is_container(it)
        is_iterable(it)
        tier_of_iterable(it)
        assert list(it) == [1, 2]

    def test_tier_of_iterable(self):
        assert tier_of_iterable([]) == Tier.RANDOM_ACCESS
        assert tier_of_iterable("abc") == Tier.RANDOM_ACCESS
        assert tier_of_iterable({}) == Tier.BIDIRECTIONAL
        assert tier_of_iterable(ForwardList()) == Tier.FORWARD
        assert tier_of_iterable(set()) == Tier.FORWARD
        assert tier_of_iterable(iter([])) == Tier.INPUT
        with pytest.raises(RangeCapabilityError):
            tier_of_iterable(5)


class TestRangeTraits:
    """Test the trait registry"""

    def test_integer_range_traits(self):
        traits = range_traits(range(4))
        assert traits.range_type == "IteratorPair"
        assert traits.cursor_type is IntegerCursor
        assert traits.size_type is int
        assert traits.tier == Tier.RANDOM_ACCESS
        assert traits.ownership == Ownership.BORROWED

    def test_container_traits(self):
        traits = range_traits(range([1, 2]))
        assert traits.range_type == "Container"
        assert traits.cursor_type is SequenceCursor

    def test_owned_traits(self):
        traits = range_traits(range([1, 2], owned=True))
        assert traits.ownership == Ownership.OWNED

    def test_iterator_traits(self):
        traits = range_traits(range(x for x in [1]))
        assert traits.range_type == "Iterable"
        assert traits.cursor_type is InputCursor
        assert traits.tier == Tier.INPUT

    def test_forward_traits(self):
        traits = range_traits(range(ForwardList([1])))
        assert traits.cursor_type is StepCursor
        assert traits.tier == Tier.FORWARD

    def test_non_range_rejected(self):
        with pytest.raises(RangeCapabilityError):
            range_traits([1, 2])

    def test_traits_are_frozen(self):
        traits = range_traits(range(4))
        with pytest.raises(ValidationError):
            traits.tier = Tier.INPUT

    def test_registry_contents(self):
        for name in ("IteratorPair", "Iterable", "Container", "FilterRange", "MapRange"):
            assert name in RANGE_REGISTRY


class TestDispatch:
    """Test which representation range() builds"""

    def test_integer_range(self):
        r = range(4, 10)
        assert isinstance(r, IteratorPair)
        assert r.begin().value == 4
        assert r.end().value == 10
        assert not r.empty()
        assert r.size() == 6

        r2 = range(0)
        assert r2.empty()
        assert r2.size() == 0
        assert list(range(3)) == [0, 1, 2]

    def test_integer_range_bounds_are_ordered(self):
        with pytest.raises(AssertionError):
            range(5, 2)

    def test_cursor_pair(self):
        data = [1, 2, 3]
        r = range(SequenceCursor(data, 1), SequenceCursor(data, 3))
        assert isinstance(r, IteratorPair)
        assert list(r) == [2, 3]
        assert r.size() == 2

    def test_cursor_pair_must_match(self):
        with pytest.raises(RangeCapabilityError):
            range(IntegerCursor(0), SequenceCursor([1], 1))
        with pytest.raises(RangeCapabilityError):
            range(1, "a")

    def test_container_reference(self):
        """Test that a borrowed mutable container is writable through the range"""
        vec = [0, 1, 2, 3, 4]
        r = range(vec)
        assert isinstance(r, Container)
        assert not r.empty()
        assert r.size() == 5
        assert r.begin() == SequenceCursor(vec, 0)
        assert r.end() == SequenceCursor(vec, 5)

        r.begin().value = 42
        assert vec[0] == 42
        assert list(r) == vec

    def test_borrowed_range_sees_updates(self):
        vec = [1, 2]
        r = range(vec)
        vec.append(3)
        assert r.size() == 3
        assert list(r) == [1, 2, 3]

    def test_container_value(self):
        """Test that an owned container is read-only"""
        r = range([1, 2, 3, 4], owned=True)
        assert not r.empty()
        assert r.size() == 4
        assert r.begin().value == 1
        assert r.ownership == Ownership.OWNED
        with pytest.raises(ReadOnlyRangeError):
            r.begin().value = 0

    def test_immutable_sequence_is_read_only(self):
        with pytest.raises(ReadOnlyRangeError):
            range((1, 2)).begin().value = 0

    def test_iterator_source(self):
        r = range(x * x for x in [1, 2, 3])
        assert type(r) is Iterable
        assert r.tier == Tier.INPUT
        assert list(r) == [1, 4, 9]

    def test_unsized_iterable(self):
        """Test that an unsized re-iterable source is sized by walking it"""
        r = range(Stream([5, 6, 7]))
        assert type(r) is Iterable
        assert r.tier == Tier.FORWARD
        assert r.size() == 3
        assert list(r) == [5, 6, 7]
        assert list(r) == [5, 6, 7]

    def test_reversible_container(self):
        r = range({"a": 1, "b": 2})
        assert isinstance(r, Container)
        assert r.tier == Tier.BIDIRECTIONAL
        assert list(reversed(r)) == ["b", "a"]
        assert r.back() == "b"

    def test_range_propagates(self):
        r = range(5)
        assert range(r) is r

    def test_owning_a_borrowed_range_is_rejected(self):
        with pytest.raises(RangeCapabilityError):
            range(range([1, 2, 3]), owned=True)
        with pytest.raises(RangeCapabilityError):
            range(range(3), owned=True)

    def test_owned_range_propagates(self):
        r = range([1, 2, 3], owned=True)
        assert range(r, owned=True) is r

    def test_rejects_non_iterables(self):
        with pytest.raises(RangeCapabilityError):
            range(object())
        with pytest.raises(RangeCapabilityError):
            range(1.5)

    def test_arity(self):
        with pytest.raises(TypeError):
            range()
        with pytest.raises(TypeError):
            range(1, 2, 3)


class TestRangeProtocols:
    """Test the Python protocols every range supports"""

    def test_len_and_bool(self):
        assert len(range(3)) == 3
        assert range(3)
        assert not range([])

    def test_indexing(self):
        r = range(10, 15)
        assert r[0] == 10
        assert r[-1] == 14
        with pytest.raises(IndexError):
            r[5]
        with pytest.raises(IndexError):
            r[-6]

    def test_indexing_requires_random_access(self):
        with pytest.raises(RangeCapabilityError):
            range(ForwardList([1, 2]))[0]

    def test_slicing(self):
        r = range([0, 1, 2, 3, 4])
        assert r[1:3] == [1, 2]
        assert r[-2:] == [3, 4]
        assert r[:2] == [0, 1]
        with pytest.raises(ValueError):
            r[::2]

    def test_equality(self):
        assert range(3) == [0, 1, 2]
        assert range(3) == range([0, 1, 2])
        assert range(3) != [0, 1]
        assert range(3) != [0, 1, 2, 3]
        assert range(0) == []

    def test_reversed_requires_bidirectional(self):
        with pytest.raises(RangeCapabilityError):
            reversed(range(ForwardList([1, 2])))
        assert list(reversed(range(4))) == [3, 2, 1, 0]

    def test_front_and_back(self):
        r = range([7, 8, 9])
        assert r.front() == 7
        assert r.back() == 9
        with pytest.raises(AssertionError):
            range([]).front()
        with pytest.raises(RangeCapabilityError):
            range(ForwardList([1])).back()

    def test_repr(self):
        assert "IteratorPair" in repr(range(2))
        assert "owned" in repr(range([1], owned=True))

    def test_to_list(self):
        assert range(2, 5).to_list() == [2, 3, 4]

    def test_list_of_single_pass_range(self):
        assert list(range(iter([1, 2, 3]))) == [1, 2, 3]
        assert list(range(x for x in "ab")) == ["a", "b"]
        assert range(iter([1, 2, 3])).to_list() == [1, 2, 3]

    def test_list_of_mapped_single_pass_range(self):
        assert range(x for x in ["a", "bb"]).map(len).to_list() == [1, 2]
        assert list(range(x for x in ["a", "bb"]).map(len)) == [1, 2]

    def test_single_pass_range_has_no_len(self):
        it = iter([1, 2])
        r = range(it)
        with pytest.raises(TypeError):
            len(r)
        assert r.to_list() == [1, 2]
