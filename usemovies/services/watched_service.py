"""Watched list statistics"""

from typing import Iterable, Optional, Sequence

from ..schemas.watched import WatchedItem, WatchedSummary


def average(values: Iterable[Optional[float]]) -> Optional[float]:
    """Arithmetic mean of the known values, ``None`` if there are none"""
    known = [value for value in values if value is not None]
    if not known:
        return None
    return sum(known) / len(known)


def summarize(items: Sequence[WatchedItem]) -> WatchedSummary:
    """
    Count and averages over the watched list.

    An empty list gives ``count=0`` and ``None`` for every average. Items
    with an unknown IMDb rating or runtime are left out of that one average.
    """
    return WatchedSummary(
        count=len(items),
        avg_imdb_rating=average(item.imdb_rating for item in items),
        avg_user_rating=average(item.user_rating for item in items),
        avg_runtime=average(item.runtime for item in items),
    )
