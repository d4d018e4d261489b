"""Order number extraction and bucket classification.

A script is *ordered* when its name starts with ``ordered.`` directly
followed by decimal digits, e.g. ``ordered.07.path.sh``. The digit run
is its order number. Ordered scripts below the cutoff run first, then
every unordered script, then ordered scripts at or above the cutoff.
"""

import re
from collections.abc import Iterable

from scriptsort.core.errors import ArgumentError
from scriptsort.models.entry import DEFAULT_CUTOFF, Bucket, ClassifiedEntries, Entry

ORDERED_PREFIX = "ordered."

# Largest representable order number (signed 32-bit).
ORDER_NUMBER_MAX = 2**31 - 1

_ORDERED_PATTERN = re.compile(re.escape(ORDERED_PREFIX) + r"([0-9]+)")


def extract_order_number(filename: str) -> int | None:
    """Extract the order number from a script filename.

    Args:
        filename: Script filename (basename).

    Returns:
        The parsed digit run following ``ordered.``, or None if the prefix
        is missing, no digit follows it, or the number is out of range.
    """
    match = _ORDERED_PATTERN.match(filename)
    if match is None:
        return None

    number = int(match.group(1))
    if number > ORDER_NUMBER_MAX:
        return None
    return number


def bucket_for(order_number: int | None, cutoff: int) -> Bucket:
    """Determine the bucket for an order number."""
    if order_number is None:
        return Bucket.UNORDERED
    if order_number < cutoff:
        return Bucket.LOWER
    return Bucket.UPPER


def validate_cutoff(cutoff: int) -> int:
    """Ensure the cutoff is a positive integer.

    Raises:
        ArgumentError: If the cutoff is zero or negative.
    """
    if cutoff <= 0:
        msg = (
            f"Invalid cutoff {cutoff}: the cutoff defaults to {DEFAULT_CUTOFF}, "
            "but must be a number greater than 0."
        )
        raise ArgumentError(msg)
    return cutoff


def classify(names: Iterable[str], cutoff: int = DEFAULT_CUTOFF) -> ClassifiedEntries:
    """Partition script names into the lower, unordered and upper buckets.

    Bucket contents keep the input order; see ``scriptsort.core.sorter``.

    Args:
        names: Script names as returned by the scanner.
        cutoff: Boundary between the lower and upper buckets.

    Returns:
        ClassifiedEntries holding every input name exactly once.

    Raises:
        ArgumentError: If the cutoff is not positive.
    """
    validate_cutoff(cutoff)

    buckets: dict[Bucket, list[Entry]] = {bucket: [] for bucket in Bucket}
    for name in names:
        entry = Entry(name=name, order_number=extract_order_number(name))
        buckets[bucket_for(entry.order_number, cutoff)].append(entry)

    return ClassifiedEntries(
        lower=tuple(buckets[Bucket.LOWER]),
        unordered=tuple(buckets[Bucket.UNORDERED]),
        upper=tuple(buckets[Bucket.UPPER]),
        cutoff=cutoff,
    )
