"""Domain models for scriptsort.

This module exports the entry and bucket data structures.
"""

from scriptsort.models.entry import (
    BUCKET_ORDER,
    DEFAULT_CUTOFF,
    Bucket,
    ClassifiedEntries,
    Entry,
)

__all__ = [
    "BUCKET_ORDER",
    "DEFAULT_CUTOFF",
    "Bucket",
    "ClassifiedEntries",
    "Entry",
]
