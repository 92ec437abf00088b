"""
Plate math.

Converts a bar load into the plates needed on each side, and rounds exact
percentages of the training max to a loadable weight.

Greedy loading
--------------
  per_side = (target − bar) / 2
  for plate in plates (descending): use as many as fit, carry the remainder

Greedy is exact for the standard 45/25/10/5/2.5 set: every reachable
per-side load is a multiple of 2.5 and the larger denominations never force
a suboptimal choice.  This is an assumption about the plate set, not a
general bin-packing solver; a remainder that no plate can cover is reported
rather than hidden.

Rounding
--------
  round_to_increment(w) = nearest multiple of 5, half-way values away from zero
  (102.5 → 105, 97.5 → 100)

Arithmetic goes through Decimal on the shortest repr of each float so that
values such as 202.5 land on the half-way branch instead of 202.4999….
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from .config import BAR_WEIGHT, PLATE_SIZES, ROUNDING_INCREMENT


def _dec(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def round_to_increment(weight: float, increment: float = ROUNDING_INCREMENT) -> float:
    """
    Round weight to the nearest multiple of increment.

    Args:
        weight: Exact load (e.g. training max × percentage)
        increment: Rounding step, 5 by default (a pair of 2.5 plates)

    Returns:
        Rounded load; half-way values round away from zero
    """
    if increment <= 0:
        raise ValueError("increment must be positive")
    step = _dec(increment)
    units = (_dec(weight) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(units * step)


@dataclass
class PlateLoadout:
    """Plates per side for one target load."""

    target: float
    bar_weight: float
    per_side: float
    plates: list[tuple[float, int]] = field(default_factory=list)  # (plate, count) descending
    remainder: float = 0.0  # per-side load no available plate could cover

    @property
    def is_bar_only(self) -> bool:
        return self.target <= self.bar_weight

    @property
    def loaded_weight(self) -> float:
        """Weight actually on the bar with the resolved plates."""
        return self.bar_weight + 2 * sum(p * n for p, n in self.plates)


def plate_loadout(
    target: float,
    bar_weight: float = BAR_WEIGHT,
    plates: tuple[float, ...] | list[float] = PLATE_SIZES,
) -> PlateLoadout:
    """
    Resolve a target load into plates per side.

    Args:
        target: Total load including the bar
        bar_weight: Empty bar weight (45 by default)
        plates: Available plate sizes; sorted descending before use

    Returns:
        PlateLoadout; empty plate list when target ≤ bar_weight ("bar only")
    """
    if target <= bar_weight:
        return PlateLoadout(target=target, bar_weight=bar_weight, per_side=0.0)

    remaining = (_dec(target) - _dec(bar_weight)) / 2
    per_side = float(remaining)
    result: list[tuple[float, int]] = []

    for plate in sorted(plates, reverse=True):
        size = _dec(plate)
        if size <= 0:
            continue
        count = int((remaining / size).to_integral_value(rounding=ROUND_DOWN))
        if count > 0:
            result.append((float(plate), count))
            remaining -= size * count

    return PlateLoadout(
        target=target,
        bar_weight=bar_weight,
        per_side=per_side,
        plates=result,
        remainder=float(remaining),
    )


def resolve_plates(
    target: float,
    bar_weight: float = BAR_WEIGHT,
    plates: tuple[float, ...] | list[float] = PLATE_SIZES,
) -> list[tuple[float, int]]:
    """
    Return the ordered (plate, count) list per side for target.

    resolve_plates(225) → [(45.0, 2)];  resolve_plates(45) → []  (bar only)
    """
    return plate_loadout(target, bar_weight, plates).plates
