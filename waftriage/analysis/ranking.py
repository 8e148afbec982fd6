"""
Frequency aggregator - top-N rankings over any derived key.
"""

from typing import Callable, Iterable, List, TypeVar

from waftriage.models.report import RankedEntry


T = TypeVar("T")


def top_n(items: Iterable[T], key_fn: Callable[[T], str], n: int) -> List[RankedEntry]:
    """
    Rank the most frequent keys derived from ``items``.
    
    Counts are kept in a dict, whose iteration follows first insertion,
    and ``sorted`` is stable, so equal counts keep first-seen order.
    Items whose key is empty or blank are skipped.
    
    Args:
        items: Items to count
        key_fn: Derives the ranking key from an item
        n: Maximum number of entries to return
        
    Returns:
        Up to ``n`` entries, most frequent first
    """
    if n <= 0:
        return []
    
    counts = {}
    for item in items:
        key = key_fn(item)
        if not key or not key.strip():
            continue
        counts[key] = counts.get(key, 0) + 1
    
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [RankedEntry(value=value, count=count) for value, count in ranked[:n]]


def count_where(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    """Count items matching a predicate."""
    return sum(1 for item in items if predicate(item))
