"""Capability classifier, range trait registry and error types for the range engine."""

import logging
from collections.abc import Iterable, Iterator, Reversible, Sequence, Sized
from typing import Any, Dict, Optional

from models import RangeTraits, Tier

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Global range registry: class name -> range class
RANGE_REGISTRY: Dict[str, type] = {}


class RangeError(Exception):
    """Base class for range engine errors."""
    pass


class RangeCapabilityError(RangeError, TypeError):
    """Raised when an argument lacks the capability an operation requires."""
    pass


class ReadOnlyRangeError(RangeError, TypeError):
    """Raised when writing through a cursor of a read-only range."""
    pass


# --------- capability classifier ----------
# Every predicate only inspects the type of its argument: nothing is iterated,
# called or sized.

def is_cursor(obj: Any) -> bool:
    """True if obj has the cursor shape (tier, value, next)."""
    cls = type(obj)
    return all(hasattr(cls, name) for name in ("tier", "value", "next"))


def is_iterable(obj: Any) -> bool:
    """True if obj can produce an iterator."""
    return isinstance(obj, Iterable)


def is_container(obj: Any) -> bool:
    """True if obj is iterable and knows its own size."""
    return isinstance(obj, Iterable) and isinstance(obj, Sized)


def is_range(obj: Any) -> bool:
    """True if the type of obj carries a registered trait record."""
    return any(isinstance(obj, cls) for cls in RANGE_REGISTRY.values())


def register_range(cls):
    """Class decorator adding a range class to RANGE_REGISTRY."""
    if cls.__name__ in RANGE_REGISTRY and RANGE_REGISTRY[cls.__name__] is not cls:
        raise RangeError(f"Range class name already registered: {cls.__name__}")
    RANGE_REGISTRY[cls.__name__] = cls
    logger.debug(f"Registered range class: {cls.__name__}")
    return cls


def range_traits(obj: Any) -> RangeTraits:
    """Return the trait record of a range."""
    if not is_range(obj):
        raise RangeCapabilityError(f"{type(obj).__name__} is not a range")
    return RangeTraits(
        range_type=type(obj).__name__,
        cursor_type=obj.cursor_type,
        size_type=int,
        tier=obj.tier,
        ownership=obj.ownership,
    )


def tier_of_iterable(obj: Any) -> Tier:
    """
    Tier at which a plain Python iterable can be traversed.

    Iterators are single pass. Sequences support indexing. Reversible sized
    objects can be walked backwards. Anything else iterable is assumed to hand
    out a fresh iterator on every ``iter()`` call.
    """
    if isinstance(obj, Iterator):
        return Tier.INPUT
    if isinstance(obj, Sequence):
        return Tier.RANDOM_ACCESS
    if isinstance(obj, Reversible) and isinstance(obj, Sized):
        return Tier.BIDIRECTIONAL
    if isinstance(obj, Iterable):
        return Tier.FORWARD
    raise RangeCapabilityError(f"{type(obj).__name__} is not iterable")


def require_tier(subject: Any, tier: Tier, operation: str, actual: Optional[Tier] = None):
    """Reject subject unless its tier is at least `tier`."""
    actual = subject.tier if actual is None else actual
    if actual < tier:
        raise RangeCapabilityError(
            f"{operation} requires a {tier.name.lower()} cursor, "
            f"{type(subject).__name__} is only {actual.name.lower()}"
        )


def normalize_index(index: int, size: int) -> int:
    """Map a negative index to its position counted from the end."""
    return index + size if index < 0 else index
