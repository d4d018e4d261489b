"""Growable output buffer.

The buffer keeps an explicit capacity that starts at a fixed size and
doubles until an append fits, giving amortized constant-time appends.
"""

import logging

from scriptsort.core.errors import AllocationError

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 4096


class OutputBuffer:
    """Byte buffer with doubling growth.

    Args:
        initial_capacity: Capacity reserved up front, in bytes.

    Raises:
        AllocationError: If the initial storage cannot be allocated.
    """

    def __init__(self, initial_capacity: int = INITIAL_CAPACITY) -> None:
        if initial_capacity < 1:
            msg = f"Initial capacity must be positive, got {initial_capacity}"
            raise ValueError(msg)

        self._size = 0
        self._capacity = initial_capacity
        try:
            self._data = self._allocate(initial_capacity)
        except MemoryError as e:
            msg = f"Failed to allocate initial buffer of {initial_capacity} byte(s)"
            raise AllocationError(msg) from e

    @staticmethod
    def _allocate(capacity: int) -> bytearray:
        return bytearray(capacity)

    @property
    def capacity(self) -> int:
        """Currently reserved capacity in bytes."""
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def _ensure_capacity(self, needed: int) -> None:
        """Double the capacity until ``needed`` bytes fit.

        Raises:
            AllocationError: If the larger storage cannot be allocated.
                The buffer contents are released before raising.
        """
        if needed <= self._capacity:
            return

        new_capacity = max(self._capacity, 1)
        while new_capacity < needed:
            new_capacity *= 2

        try:
            grown = self._allocate(new_capacity)
        except MemoryError as e:
            self.release()
            msg = f"Failed to reallocate buffer to size {new_capacity}"
            raise AllocationError(msg) from e

        grown[: self._size] = self._data[: self._size]
        logger.debug("Grew output buffer from %d to %d bytes", self._capacity, new_capacity)
        self._data = grown
        self._capacity = new_capacity

    def append(self, data: bytes) -> None:
        """Append bytes, growing the buffer as needed."""
        end = self._size + len(data)
        self._ensure_capacity(end)
        self._data[self._size : end] = data
        self._size = end

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._data[: self._size])

    def release(self) -> None:
        """Drop the buffer storage."""
        self._data = bytearray()
        self._size = 0
        self._capacity = 0
