"""
Cross-Section Curve
===================

Immutable (energy, cross section) sample sequence with an evaluation
capability used by the ratio and report layers.

A curve is the unit of data throughout nuxsec: sources produce curves,
the trimmer and ratio computer derive new curves from them, and the
visualization layer draws them. Absent curves are represented by ``None``
and every consumer propagates ``None`` rather than failing.

Interpolation:
    'linear' - piecewise-linear between samples, linearly extrapolated
               beyond the first/last sample (interp1d, fill_value='extrapolate')
    'spline' - cubic spline through the samples (scipy CubicSpline),
               extrapolated with the boundary polynomials

Example:
    >>> from nuxsec.curves import Curve
    >>> curve = Curve([0.1, 1.0, 10.0], [0.05, 0.7, 6.9], name='tot_cc')
    >>> curve.eval(5.0)
    3.455...
"""

import logging
from typing import Iterable, Optional, Tuple, Union

import numpy as np
from scipy.interpolate import CubicSpline, interp1d

logger = logging.getLogger(__name__)

INTERPOLATION_MODES = ('linear', 'spline')


class Curve:
    """
    Ordered sequence of (x, y) samples.

    Attributes:
        x: Energies, read-only array, non-decreasing
        y: Cross sections, read-only array, same length as x
        name: Identifier (usually the category name)
        interpolation: Evaluation rule, one of INTERPOLATION_MODES
    """

    def __init__(
        self,
        x: Iterable[float],
        y: Iterable[float],
        name: str = '',
        interpolation: str = 'linear',
    ):
        x = np.array(x, dtype=float).ravel()
        y = np.array(y, dtype=float).ravel()

        if x.shape != y.shape:
            raise ValueError(
                f"Curve '{name}': x and y must have the same length "
                f"(got {len(x)} and {len(y)})"
            )
        if interpolation not in INTERPOLATION_MODES:
            raise ValueError(
                f"Unknown interpolation '{interpolation}'. "
                f"Expected one of {INTERPOLATION_MODES}"
            )
        if len(x) > 1 and np.any(np.diff(x) < 0):
            raise ValueError(f"Curve '{name}': x values must be non-decreasing")

        x.flags.writeable = False
        y.flags.writeable = False

        self._x = x
        self._y = y
        self.name = name
        self.interpolation = interpolation
        self._evaluator = None

    @classmethod
    def from_unsorted(
        cls,
        x: Iterable[float],
        y: Iterable[float],
        name: str = '',
        interpolation: str = 'linear',
    ) -> 'Curve':
        """Build a curve from samples in arbitrary order (stable sort by x)."""
        x = np.asarray(x, dtype=float).ravel()
        y = np.asarray(y, dtype=float).ravel()
        order = np.argsort(x, kind='stable')
        return cls(x[order], y[order], name=name, interpolation=interpolation)

    @property
    def x(self) -> np.ndarray:
        return self._x

    @property
    def y(self) -> np.ndarray:
        return self._y

    def __len__(self) -> int:
        return len(self._x)

    def __iter__(self):
        return iter(zip(self._x.tolist(), self._y.tolist()))

    def __repr__(self) -> str:
        return f"Curve(name='{self.name}', n_points={len(self)})"

    @property
    def is_empty(self) -> bool:
        return len(self._x) == 0

    def x_range(self) -> Tuple[float, float]:
        """(min, max) of the x samples."""
        if self.is_empty:
            raise ValueError(f"Curve '{self.name}' has no points")
        return float(self._x[0]), float(self._x[-1])

    def y_range(self) -> Tuple[float, float]:
        """(min, max) of the y samples."""
        if self.is_empty:
            raise ValueError(f"Curve '{self.name}' has no points")
        return float(np.min(self._y)), float(np.max(self._y))

    def subset(self, mask: np.ndarray, name: Optional[str] = None) -> 'Curve':
        """New curve holding the points selected by a boolean mask."""
        mask = np.asarray(mask, dtype=bool)
        return Curve(
            self._x[mask],
            self._y[mask],
            name=self.name if name is None else name,
            interpolation=self.interpolation,
        )

    def with_interpolation(self, interpolation: str) -> 'Curve':
        """Same samples, different evaluation rule."""
        return Curve(self._x, self._y, name=self.name, interpolation=interpolation)

    def eval(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Evaluate the curve at arbitrary x.

        Args:
            x: Scalar or array of energies

        Returns:
            float for scalar input, ndarray otherwise

        Raises:
            ValueError: If the curve has no points
        """
        if self.is_empty:
            raise ValueError(f"Cannot evaluate empty curve '{self.name}'")

        if self._evaluator is None:
            self._evaluator = self._build_evaluator()

        values = np.asarray(self._evaluator(np.asarray(x, dtype=float)), dtype=float)
        if np.ndim(x) == 0:
            return float(values)
        return values

    def _build_evaluator(self):
        # Duplicate x values would make the interpolants singular; keep the first
        x_unique, first = np.unique(self._x, return_index=True)
        y_unique = self._y[first]

        if len(x_unique) == 1:
            value = float(y_unique[0])
            return lambda q: np.full(np.shape(q), value)

        if self.interpolation == 'spline' and len(x_unique) >= 3:
            return CubicSpline(x_unique, y_unique, extrapolate=True)

        if self.interpolation == 'spline':
            logger.debug(
                f"Curve '{self.name}' has {len(x_unique)} distinct points; "
                f"falling back to linear interpolation"
            )

        return interp1d(
            x_unique,
            y_unique,
            kind='linear',
            bounds_error=False,
            fill_value='extrapolate',
            assume_sorted=True,
        )
