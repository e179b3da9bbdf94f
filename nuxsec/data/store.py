"""
Curve Store
===========

Pairs a "current" cross-section source with an optional "reference"
source and hands out curves for (directory, category) on demand.

Error policy:
    - The current source must open; failures raise SourceOpenError.
    - A reference source that fails to open is dropped with a warning and
      the store continues without a reference.
    - Absent directories and categories yield None.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from nuxsec.curves.curve import Curve
from nuxsec.data.sources import CurveSource, SourceOpenError, open_source

logger = logging.getLogger(__name__)

DEFAULT_CURRENT_LABEL = 'current'
DEFAULT_REFERENCE_LABEL = 'reference'


@dataclass
class NamedCurveSet:
    """Curves for one category of one directory.

    Attributes:
        directory: Probe+target directory name
        category: Category name
        current: Curve from the current source, or None
        reference: Curve from the reference source, or None
        label: Display title of the category
    """

    directory: str
    category: str
    current: Optional[Curve]
    reference: Optional[Curve]
    label: str = ''

    @property
    def is_empty(self) -> bool:
        return self.current is None and self.reference is None


class CurveStore:
    """
    Current + optional reference cross-section sources.

    Args:
        current_path: Path to the current source (required)
        reference_path: Path to the reference source (optional)
        current_label: Legend label of the current curves
        reference_label: Legend label of the reference curves
        interpolation: Evaluation rule for loaded curves ('linear' or 'spline')

    Raises:
        SourceOpenError: If the current source cannot be opened

    Example:
        >>> with CurveStore('xsec-v3.root', 'xsec-v2.root') as store:
        ...     for directory in store.directories():
        ...         curves = store.load(directory, 'tot_cc')
    """

    def __init__(
        self,
        current_path: Union[str, Path],
        reference_path: Optional[Union[str, Path]] = None,
        current_label: str = DEFAULT_CURRENT_LABEL,
        reference_label: str = DEFAULT_REFERENCE_LABEL,
        interpolation: str = 'linear',
    ):
        current = open_source(Path(current_path), interpolation)
        logger.info(f"Opened current source: {current.path}")

        reference = None
        if reference_path:
            try:
                reference = open_source(Path(reference_path), interpolation)
                logger.info(f"Opened reference source: {reference.path}")
            except SourceOpenError as e:
                logger.warning(f"{e}. Continuing without reference curves.")
        else:
            logger.info("No reference cross-section source")

        self._setup(current, reference, current_label, reference_label)

    @classmethod
    def from_sources(
        cls,
        current: CurveSource,
        reference: Optional[CurveSource] = None,
        current_label: str = DEFAULT_CURRENT_LABEL,
        reference_label: str = DEFAULT_REFERENCE_LABEL,
    ) -> 'CurveStore':
        """Build a store around already-open sources."""
        store = cls.__new__(cls)
        store._setup(current, reference, current_label, reference_label)
        return store

    def _setup(
        self,
        current: CurveSource,
        reference: Optional[CurveSource],
        current_label: str,
        reference_label: str,
    ) -> None:
        self._current = current
        self._reference = reference
        self.current_path = current.path
        self.reference_path = reference.path if reference is not None else None
        self.current_label = current_label
        self.reference_label = reference_label

    @property
    def has_reference(self) -> bool:
        return self._reference is not None

    def directories(self) -> List[str]:
        """Directory names of the current source, in source order."""
        return self._current.directories()

    def reference_has_directory(self, directory: str) -> bool:
        return self._reference is not None and self._reference.has_directory(directory)

    def get_current(self, directory: str, category: str) -> Optional[Curve]:
        return self._current.get_curve(directory, category)

    def get_reference(self, directory: str, category: str) -> Optional[Curve]:
        if self._reference is None:
            return None
        return self._reference.get_curve(directory, category)

    def load(self, directory: str, category: str, label: str = '') -> NamedCurveSet:
        return NamedCurveSet(
            directory=directory,
            category=category,
            current=self.get_current(directory, category),
            reference=self.get_reference(directory, category),
            label=label or category,
        )

    def close(self) -> None:
        self._current.close()
        if self._reference is not None:
            self._reference.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
