"""Script entry domain models.

This module defines the immutable data structures produced by the
classifier: a single scanned entry, the bucket it belongs to, and the
three-bucket partition handed to the sorter and assembler.
"""

import os
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class Bucket(str, Enum):
    """Execution group of a script.

    Attributes:
        LOWER: Ordered scripts whose number is below the cutoff.
        UNORDERED: Scripts without an order number.
        UPPER: Ordered scripts whose number is at or above the cutoff.
    """

    LOWER = "lower"
    UNORDERED = "unordered"
    UPPER = "upper"


# Boundary between the lower and upper buckets unless configured otherwise.
DEFAULT_CUTOFF = 50

# Emission order of the buckets, independent of any flag.
BUCKET_ORDER: tuple[Bucket, ...] = (Bucket.LOWER, Bucket.UNORDERED, Bucket.UPPER)


@dataclass(frozen=True, slots=True)
class Entry:
    """A scanned script filename.

    Attributes:
        name: Filename relative to the scanned directory.
        order_number: Parsed order number, or None for unordered scripts.
    """

    name: str
    order_number: int | None = None

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.name:
            msg = "Entry name cannot be empty"
            raise ValueError(msg)
        if self.order_number is not None and self.order_number < 0:
            msg = f"Order number must be non-negative, got {self.order_number}"
            raise ValueError(msg)

    @property
    def raw_name(self) -> bytes:
        """Filename in the filesystem encoding."""
        return os.fsencode(self.name)

    @property
    def length(self) -> int:
        """Byte length of the filename."""
        return len(self.raw_name)

    @property
    def is_ordered(self) -> bool:
        """Check if the entry carries an order number."""
        return self.order_number is not None


@dataclass(frozen=True, slots=True)
class ClassifiedEntries:
    """Entries partitioned into the lower, unordered and upper buckets.

    Attributes:
        lower: Ordered entries below the cutoff.
        unordered: Entries without an order number.
        upper: Ordered entries at or above the cutoff.
        cutoff: The cutoff used for partitioning.
    """

    lower: tuple[Entry, ...] = ()
    unordered: tuple[Entry, ...] = ()
    upper: tuple[Entry, ...] = ()
    cutoff: int = DEFAULT_CUTOFF

    def bucket(self, bucket: Bucket) -> tuple[Entry, ...]:
        """Get the entries of a single bucket."""
        if bucket == Bucket.LOWER:
            return self.lower
        if bucket == Bucket.UPPER:
            return self.upper
        return self.unordered

    def ordered(self) -> Iterator[Entry]:
        """Iterate over all entries in emission order."""
        for bucket in BUCKET_ORDER:
            yield from self.bucket(bucket)

    @property
    def total_name_bytes(self) -> int:
        """Sum of the byte lengths of all entry names."""
        return sum(entry.length for entry in self.ordered())

    def __len__(self) -> int:
        return len(self.lower) + len(self.unordered) + len(self.upper)
