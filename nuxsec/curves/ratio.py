"""
Point-wise ratio of two cross-section curves.

The ratio is sampled at the numerator's x values; both curves are evaluated
through their own interpolation rule (``Curve.eval``). Zero-valued operands
are mapped to sentinel values instead of raising:

    numerator == 0, denominator != 0   ->  NUMERATOR_VANISHED   (-1)
    numerator != 0, denominator == 0   ->  DENOMINATOR_VANISHED (+1)
    numerator == 0, denominator == 0   ->  DENOMINATOR_VANISHED (+1)

The both-zero case falls through to the +1 branch.
"""

import logging
from typing import Optional

import numpy as np

from nuxsec.curves.curve import Curve

logger = logging.getLogger(__name__)

NUMERATOR_VANISHED = -1.0
DENOMINATOR_VANISHED = 1.0


def compute_ratio(
    numerator: Optional[Curve],
    denominator: Optional[Curve],
    name: Optional[str] = None,
) -> Optional[Curve]:
    """
    Compute ``numerator / denominator`` at the numerator's x samples.

    Args:
        numerator: Curve providing the sample positions, or None
        denominator: Curve evaluated at those positions, or None
        name: Name of the resulting curve. Defaults to 'ratio_<numerator>'.

    Returns:
        Ratio curve, or None when either input is absent
    """
    if numerator is None or denominator is None:
        return None

    if name is None:
        name = f"ratio_{numerator.name}" if numerator.name else 'ratio'

    x = numerator.x
    if len(x) == 0 or denominator.is_empty:
        return Curve([], [], name=name, interpolation=numerator.interpolation)

    num = np.asarray(numerator.eval(x), dtype=float)
    den = np.asarray(denominator.eval(x), dtype=float)

    num_zero = num == 0.0
    den_zero = den == 0.0

    y = np.full(len(x), DENOMINATOR_VANISHED)
    both = ~num_zero & ~den_zero
    y[both] = num[both] / den[both]
    y[num_zero & ~den_zero] = NUMERATOR_VANISHED

    n_sentinel = int(np.count_nonzero(~both))
    if n_sentinel:
        logger.debug(f"Ratio '{name}': {n_sentinel} point(s) set to sentinel values")

    return Curve(x, y, name=name, interpolation=numerator.interpolation)
