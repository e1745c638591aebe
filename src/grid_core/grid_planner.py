"""
Grid planner: current price + spacing + count -> ordered ladder of levels.

The base level is the multiple of spacing nearest the current price
(halves round away from zero). The ladder holds ``2*count + 1`` levels,
``count`` on each side of the base, built from integer indices so that
level identity never depends on float equality.

Pure functions; no I/O.
"""

from __future__ import annotations

from grid_core.contracts import GridLevel, level_index
from grid_core.errors import InvalidParameter


def validate_params(spacing: float, count: int) -> None:
    """Raise InvalidParameter unless spacing > 0 and count >= 0."""
    if spacing <= 0:
        raise InvalidParameter(f"grid spacing must be positive, got {spacing!r}")
    if count < 0:
        raise InvalidParameter(f"grid count must be non-negative, got {count!r}")


def base_level(current_price: float, spacing: float) -> float:
    """Price of the level nearest *current_price*."""
    validate_params(spacing, 0)
    return level_index(current_price, spacing) * spacing


def compute_grid(current_price: float, spacing: float, count: int) -> list[GridLevel]:
    """Ladder as GridLevel keys, lowest first."""
    validate_params(spacing, count)
    base = level_index(current_price, spacing)
    return [GridLevel(index=base + i, spacing=spacing) for i in range(-count, count + 1)]


def compute_levels(current_price: float, spacing: float, count: int) -> list[float]:
    """Ladder as prices, strictly increasing, ``2*count + 1`` long.

    Raises
    ------
    InvalidParameter
        If ``spacing <= 0`` or ``count < 0``.
    """
    return [level.price for level in compute_grid(current_price, spacing, count)]


def dynamic_spacing(volatility: float, floor: float = 0.5, factor: float = 0.01) -> float:
    """Spacing that widens with volatility, never below *floor*."""
    return max(floor, volatility * factor)
