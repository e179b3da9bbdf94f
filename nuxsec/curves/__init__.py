"""
Curves Module
=============

Cross-section curves and the pure transforms applied to them.

Key Components:
    Curve: Immutable (energy, cross section) samples with interpolation
    trim_curve / TrimConfig: Decade-based point-density reduction
    compute_ratio: Point-wise ratio with sentinel values for zero operands
"""

from nuxsec.curves.curve import Curve, INTERPOLATION_MODES
from nuxsec.curves.trimming import TrimConfig, trim_curve, decade_blocks
from nuxsec.curves.ratio import (
    compute_ratio,
    NUMERATOR_VANISHED,
    DENOMINATOR_VANISHED,
)

__all__ = [
    "Curve",
    "INTERPOLATION_MODES",
    "TrimConfig",
    "trim_curve",
    "decade_blocks",
    "compute_ratio",
    "NUMERATOR_VANISHED",
    "DENOMINATOR_VANISHED",
]
