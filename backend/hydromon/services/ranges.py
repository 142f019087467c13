"""
Multiplant range resolution.

Given several plant profiles, find one pH range and one EC range that every
selected plant tolerates. pH is a strict interval intersection. EC uses the
same intersection: a plant whose EC interval lies wholly outside the
resulting range makes the selection incompatible, which happens exactly
when the intersection is empty.
"""
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

MIN_SELECTION = 2


class ToleranceProfile(Protocol):
    ph_min: float
    ph_max: float
    ec_min: float
    ec_max: float


class SelectionTooSmall(ValueError):
    """Raised when fewer than two profiles are given."""


@dataclass(frozen=True)
class Interval:
    low: float
    high: float

    @property
    def is_empty(self) -> bool:
        return self.high < self.low

    def excludes(self, low: float, high: float) -> bool:
        """True when [low, high] lies wholly outside this interval."""
        return low > self.high or high < self.low


@dataclass(frozen=True)
class MultiplantRange:
    ph: Interval
    ec: Interval

    def as_profile_values(self) -> dict:
        return {
            "ph_min": self.ph.low,
            "ph_max": self.ph.high,
            "ec_min": self.ec.low,
            "ec_max": self.ec.high,
        }


def intersect(intervals: Sequence[tuple[float, float]]) -> Interval:
    return Interval(
        low=max(low for low, _ in intervals),
        high=min(high for _, high in intervals),
    )


def resolve_ranges(profiles: Sequence[ToleranceProfile]) -> Optional[MultiplantRange]:
    """Return the ranges compatible with all profiles, or None if there are none.

    Raises SelectionTooSmall for fewer than two profiles: a single plant
    needs no Multiplant profile.
    """
    if len(profiles) < MIN_SELECTION:
        raise SelectionTooSmall(f"At least {MIN_SELECTION} plants are required, got {len(profiles)}")

    ph = intersect([(p.ph_min, p.ph_max) for p in profiles])
    if ph.is_empty:
        return None

    ec = intersect([(p.ec_min, p.ec_max) for p in profiles])
    if any(ec.excludes(p.ec_min, p.ec_max) for p in profiles):
        return None

    return MultiplantRange(ph=ph, ec=ec)
