"""Per-bucket ordering of classified entries."""

from collections.abc import Iterable

from scriptsort.models.entry import ClassifiedEntries, Entry

# Shared order key for entries without an order number.
_UNORDERED_SENTINEL = -1


def sort_key(entry: Entry) -> tuple[int, bytes]:
    """Build the two-part sort key for an entry.

    Order number ascending first, then byte-wise (case-sensitive) name.
    """
    order = entry.order_number if entry.order_number is not None else _UNORDERED_SENTINEL
    return (order, entry.raw_name)


def sort_bucket(entries: Iterable[Entry]) -> tuple[Entry, ...]:
    """Return the entries of one bucket in execution order."""
    return tuple(sorted(entries, key=sort_key))


def sort_entries(classified: ClassifiedEntries) -> ClassifiedEntries:
    """Sort each bucket independently.

    Args:
        classified: Output of the classifier.

    Returns:
        New ClassifiedEntries with every bucket sorted.
    """
    return ClassifiedEntries(
        lower=sort_bucket(classified.lower),
        unordered=sort_bucket(classified.unordered),
        upper=sort_bucket(classified.upper),
        cutoff=classified.cutoff,
    )
