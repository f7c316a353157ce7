"""
Shared building blocks for the aggregators.

`AccumulatorMap` is the per-call mapping from player name to a running
stats record; traversal helpers walk the innings/over/delivery hierarchy in
input order without touching the record.
"""

from typing import Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from match_analytics.schemas.record import Delivery, Innings, Match, Over

T = TypeVar("T")


class AccumulatorMap(Generic[T]):
    """Mapping of key -> accumulator, created on first sight.

    Owned by a single aggregation call. Iteration follows first-occurrence
    order, so a stable sort over `values()` keeps ties in the order players
    appeared.
    """

    def __init__(self, factory: Callable[[str], T]):
        self._factory = factory
        self._items: Dict[str, T] = {}

    def get_or_create(self, key: str) -> T:
        """Get the accumulator for `key`, inserting a fresh one if needed."""
        item = self._items.get(key)
        if item is None:
            item = self._factory(key)
            self._items[key] = item
        return item

    def get(self, key: str) -> Optional[T]:
        return self._items.get(key)

    def values(self) -> List[T]:
        return list(self._items.values())

    def items(self) -> List[Tuple[str, T]]:
        return list(self._items.items())

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    """numerator / denominator * scale, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator * scale


def iter_deliveries(innings: Innings) -> Iterator[Tuple[Over, int, Delivery]]:
    """Yield (over, 1-based ball position, delivery) in input order."""
    for over in innings.overs:
        for position, delivery in enumerate(over.deliveries, start=1):
            yield over, position, delivery


def select_innings(match: Match, innings: Optional[int] = None) -> List[Tuple[int, Innings]]:
    """Pick the innings to aggregate as (1-based index, innings) pairs.

    Raises:
        ValueError: If `innings` is given but outside 1..len(match.innings)
    """
    numbered = list(enumerate(match.innings, start=1))
    if innings is None:
        return numbered

    if innings < 1 or innings > len(numbered):
        raise ValueError(f"Innings {innings} not found (match has {len(numbered)})")
    return [numbered[innings - 1]]


def check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")


def take(items: Sequence[T], limit: Optional[int]) -> List[T]:
    """First `limit` items, or all when no limit is given."""
    check_limit(limit)
    if limit is None:
        return list(items)
    return list(items[:limit])


def is_boundary_four(delivery: Delivery) -> bool:
    return delivery.runs.batter == 4


def is_six(delivery: Delivery) -> bool:
    return delivery.runs.batter == 6


def is_dot_ball(delivery: Delivery) -> bool:
    """Nothing off the bat (extras-only deliveries still count as dots)."""
    return delivery.runs.batter == 0
