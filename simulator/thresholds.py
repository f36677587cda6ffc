"""
Loyalty threshold tables.

A ThresholdTable is an ordered ladder of named thresholds (tiers on the casino
points ladder, levels on the cruise-nights ladder). Calculators take the table
as an argument so tests and other programs can swap in their own ladders.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from simulator.models import ThresholdProgress


# Casino points are earned at one point per $5 of coin-in
DOLLARS_PER_POINT = 5


@dataclass(frozen=True)
class Threshold:
    """
    One rung of a ladder.

    Fields:
    - name: display name ('Prime', 'Diamond Plus', ...)
    - threshold: minimum cumulative value to hold this rung
    - benefits: marketing benefit list for the rung
    - points_per_night: typical points earned per night at this rung (tiers only)
    """
    name: str
    threshold: float
    benefits: Tuple[str, ...] = ()
    points_per_night: Optional[int] = None


class ThresholdTable:
    """Strictly ascending ladder of thresholds with name and value lookups."""

    def __init__(self, entries: Iterable[Threshold]):
        entries = list(entries)
        if not entries:
            raise ValueError("Threshold table must have at least one entry.")

        for lower, upper in zip(entries, entries[1:]):
            if upper.threshold <= lower.threshold:
                raise ValueError(
                    f"Threshold table must be strictly ascending: "
                    f"{upper.name} ({upper.threshold}) <= {lower.name} ({lower.threshold})"
                )

        names = [entry.name for entry in entries]
        if len(set(names)) != len(names):
            raise ValueError(f"Threshold names must be unique: {names}")

        self._entries: Tuple[Threshold, ...] = tuple(entries)
        self._by_name = {entry.name: entry for entry in entries}

    def __iter__(self) -> Iterator[Threshold]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> List[str]:
        """Names in ladder order, lowest first."""
        return [entry.name for entry in self._entries]

    def get(self, name: str) -> Optional[Threshold]:
        return self._by_name.get(name)

    def lookup(self, value: float) -> str:
        """
        Return the highest rung whose threshold is <= value.

        Values below the first threshold (including negatives and NaN)
        resolve to the lowest rung.

        Example:
            >>> CLUB_ROYALE_TIERS.lookup(2501)
            'Prime'
        """
        for entry in reversed(self._entries):
            if value >= entry.threshold:
                return entry.name
        return self._entries[0].name

    def index(self, name: str) -> int:
        """Position of `name` in the ladder, or -1 when it is not a rung."""
        entry = self._by_name.get(name)
        if entry is None:
            return -1
        return self._entries.index(entry)

    def next_after(self, name: str) -> Optional[str]:
        """The rung immediately above `name`; None at the top or for unknown names."""
        position = self.index(name)
        if position == -1 or position == len(self._entries) - 1:
            return None
        return self._entries[position + 1].name

    def threshold(self, name: str, default: float = 0) -> float:
        entry = self._by_name.get(name)
        return entry.threshold if entry is not None else default

    def progress(self, value: float, name: str) -> ThresholdProgress:
        """
        Progress from rung `name` towards the next rung.

        Args:
            value: current cumulative value (points or nights)
            name: rung the player currently holds

        Returns:
            ThresholdProgress with the next rung name, the amount still needed
            and the percent of the current band already covered (0-100).
            At the top rung: next_name None, remaining 0, percent 100.
        """
        next_name = self.next_after(name)
        if next_name is None:
            return ThresholdProgress(next_name=None, remaining=0, percent_complete=100.0)

        current_threshold = self.threshold(name)
        next_threshold = self.threshold(next_name)
        band = next_threshold - current_threshold
        percent = min(100.0, max(0.0, (value - current_threshold) / band * 100))

        return ThresholdProgress(
            next_name=next_name,
            remaining=max(0, next_threshold - value),
            percent_complete=percent,
        )

    def nights_to_threshold(self, current: float, target_name: str, per_night: float) -> int:
        """
        Nights needed to reach `target_name` earning `per_night` each night.

        Example:
            >>> CLUB_ROYALE_TIERS.nights_to_threshold(0, "Prime", 150)
            17
        """
        needed = max(0, self.threshold(target_name) - current)
        if needed == 0 or per_night <= 0:
            return 0
        return math.ceil(needed / per_night)


def coin_in_from_points(points: float) -> float:
    """Dollars of coin-in represented by `points`."""
    return points * DOLLARS_PER_POINT


def points_from_coin_in(coin_in: float) -> int:
    """Whole points earned for `coin_in` dollars wagered."""
    return math.floor(coin_in / DOLLARS_PER_POINT)


# =============================================================================
# Default ladders
# =============================================================================

CLUB_ROYALE_TIERS = ThresholdTable([
    Threshold(
        name="Choice",
        threshold=0,
        benefits=(
            "Basic casino privileges",
            "Access to Club Royale lounge",
        ),
        points_per_night=100,
    ),
    Threshold(
        name="Prime",
        threshold=2501,
        benefits=(
            "Priority boarding",
            "Complimentary specialty dining",
            "Enhanced casino offers",
            "Dedicated casino host",
        ),
        points_per_night=150,
    ),
    Threshold(
        name="Signature",
        threshold=25001,
        benefits=(
            "All Prime benefits",
            "Suite-level amenities",
            "Priority restaurant reservations",
            "Exclusive events",
            "Increased freeplay offers",
        ),
        points_per_night=200,
    ),
    Threshold(
        name="Masters",
        threshold=100001,
        benefits=(
            "All Signature benefits",
            "Complimentary suite upgrades",
            "Personal casino concierge",
            "VIP experiences",
            "Maximum comp value",
        ),
        points_per_night=300,
    ),
])

CROWN_ANCHOR_LEVELS = ThresholdTable([
    Threshold(
        name="Gold",
        threshold=1,
        benefits=(
            "Crown & Anchor Society welcome",
            "Member savings on future cruises",
            "Members-only rates and offers",
        ),
    ),
    Threshold(
        name="Platinum",
        threshold=30,
        benefits=(
            "All Gold benefits",
            "Priority check-in",
            "Robes in stateroom",
            "Access to Diamond events when available",
        ),
    ),
    Threshold(
        name="Emerald",
        threshold=55,
        benefits=(
            "All Platinum benefits",
            "Complimentary laundry service",
            "Complimentary premium photo",
            "Priority tender tickets",
        ),
    ),
    Threshold(
        name="Diamond",
        threshold=80,
        benefits=(
            "All Emerald benefits",
            "Behind-the-scenes tour",
            "Exclusive Diamond events",
            "Priority departure lounge access",
            "Complimentary pressing",
        ),
    ),
    Threshold(
        name="Diamond Plus",
        threshold=175,
        benefits=(
            "All Diamond benefits",
            "Four complimentary beverages per day",
            "Access to Suite Lounge",
            "Complimentary mini-bar setup",
        ),
    ),
    Threshold(
        name="Pinnacle",
        threshold=700,
        benefits=(
            "All Diamond Plus benefits",
            "Annual Pinnacle cruise experience",
            "Complimentary specialty dining",
            "Unlimited internet access",
            "Priority access for new itineraries",
        ),
    ),
])
