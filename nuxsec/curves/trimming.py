"""
Decade-Based Curve Trimming
===========================

Reduces the point density of a dense curve so that a marker-drawn overlay
does not hide the line-drawn curve underneath, while keeping the curve's
shape across each factor-of-10 span of energy.

Algorithm:
    1. Start a block at point ``fp`` with ``x0 = x[fp]``. The block holds
       ``fp`` and every following point with ``x <= 10 * x0`` (for
       ``x0 <= 0`` the upper edge is 0). The next block starts at the first
       point beyond.
    2. If the block holds ``count > K`` points, keep every ``stride``-th
       point, ``stride = floor(count / K)``, counting from the first point
       of the block (local index ``i`` kept when ``i % stride == 0``).
    3. Blocks with ``count <= K`` are kept as they are.

Key Classes:
    TrimConfig: Configuration (maximum points per decade).

Key Functions:
    trim_curve: Return a new, sparser curve. The input is never modified.
    decade_blocks: Block boundaries used by trim_curve.

Usage:
    >>> from nuxsec.curves import Curve, trim_curve
    >>> dense = Curve(np.logspace(-1, 2, 300), np.ones(300))
    >>> sparse = trim_curve(dense, max_points_per_decade=20)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from nuxsec.curves.curve import Curve

logger = logging.getLogger(__name__)


@dataclass
class TrimConfig:
    """Configuration for curve trimming.

    Attributes:
        max_points_per_decade: Maximum number of points kept in one decade
            block. Must be positive.
    """

    max_points_per_decade: int = 20

    def __post_init__(self):
        _check_max_points(self.max_points_per_decade)


def _check_max_points(max_points_per_decade: int) -> None:
    if int(max_points_per_decade) != max_points_per_decade or max_points_per_decade <= 0:
        raise ValueError(
            f"max_points_per_decade must be a positive integer, "
            f"got {max_points_per_decade!r}"
        )


def decade_blocks(x: np.ndarray) -> List[Tuple[int, int]]:
    """
    Split sorted x values into consecutive decade blocks.

    Args:
        x: Non-decreasing x values

    Returns:
        List of (start, stop) index pairs, stop exclusive, covering x
    """
    x = np.asarray(x, dtype=float)
    blocks = []
    n = len(x)
    fp = 0
    while fp < n:
        x0 = x[fp]
        upper = 10.0 * x0 if x0 > 0 else 0.0
        # x[fp] <= upper always holds, so every block advances by at least one
        stop = fp + int(np.searchsorted(x[fp:], upper, side='right'))
        stop = max(stop, fp + 1)
        blocks.append((fp, stop))
        fp = stop
    return blocks


def trim_curve(
    curve: Optional[Curve],
    max_points_per_decade: int = 20,
) -> Optional[Curve]:
    """
    Keep at most ~``max_points_per_decade`` points in every decade block.

    Args:
        curve: Input curve, or None
        max_points_per_decade: Positive block capacity K

    Returns:
        New Curve with the kept points in original order, or None when the
        input is None

    Raises:
        ValueError: If max_points_per_decade is not a positive integer
    """
    _check_max_points(max_points_per_decade)

    if curve is None:
        return None

    keep = np.ones(len(curve), dtype=bool)
    for start, stop in decade_blocks(curve.x):
        count = stop - start
        if count <= max_points_per_decade:
            continue
        stride = count // max_points_per_decade
        local = np.arange(count)
        keep[start:stop] = (local % stride) == 0

    trimmed = curve.subset(keep)
    logger.debug(
        f"Trimmed '{curve.name}': {len(curve)} -> {len(trimmed)} points "
        f"(max {max_points_per_decade}/decade)"
    )
    return trimmed
