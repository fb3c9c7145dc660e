"""
Range engine - Pydantic Models

Value types shared by the cursor, range and combinator modules.
"""

from abc import abstractmethod
from enum import Enum, IntEnum
from typing import Any, NamedTuple
from pydantic import BaseModel, ConfigDict, Field


class Tier(IntEnum):
    """Cursor capability tier, ordered from weakest to strongest"""
    INPUT = 0
    FORWARD = 1
    BIDIRECTIONAL = 2
    RANDOM_ACCESS = 3


class Ownership(str, Enum):
    """How a range holds its backing sequence"""
    BORROWED = "borrowed"
    OWNED = "owned"


class IndexedValue(NamedTuple):
    """Element of an indexed range: position and element"""
    index: int
    value: Any


class RangeTraits(BaseModel):
    """Trait record describing a concrete range"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    range_type: str = Field(
        ...,
        description="Name of the registered range class"
    )
    cursor_type: type = Field(
        ...,
        description="Class of the cursors returned by begin() and end()"
    )
    size_type: type = Field(
        int,
        description="Type returned by size()"
    )
    tier: Tier = Field(
        ...,
        description="Capability tier of the range cursors"
    )
    ownership: Ownership = Field(
        Ownership.BORROWED,
        description="Whether the range borrows or owns its backing sequence"
    )


class DeferredTag(BaseModel):
    """
    Parameters of a combinator invoked without a range.

    The tag is applied with the pipe operator: ``source | tag``.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @abstractmethod
    def apply(self, source):
        """Run the combinator on `source`; every tag class must define it."""

    def __ror__(self, source):
        return self.apply(source)
