"""
Cross-Section Sources
=====================

Read-only access to files holding named cross-section curves grouped into
probe+target directories.

Supported formats:
    .root            - ROOT file (read with uproot). Top-level TDirectory
                       objects, each holding TGraph objects keyed by
                       category name, as written by GENIE's gspl2root.
    .parquet / .pq   - Long-format table with columns
    .csv               ``directory, category, energy, xsec``
                       (read with pandas; parquet through pyarrow)

Absence is not an error: asking for a directory or category a source does
not hold returns None.

Classes:
    CurveSource: Interface shared by all formats
    RootCurveSource: uproot-backed reader
    TableCurveSource: pandas-backed reader
    SourceOpenError: Raised when a source cannot be opened

Example:
    >>> with open_source('xsec-v3.root') as source:
    ...     for directory in source.directories():
    ...         curve = source.get_curve(directory, 'tot_cc')
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from nuxsec.curves.curve import Curve

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ('directory', 'category', 'energy', 'xsec')
ROOT_SUFFIXES = ('.root',)
PARQUET_SUFFIXES = ('.parquet', '.pq')
CSV_SUFFIXES = ('.csv',)


class SourceOpenError(OSError):
    """A cross-section source could not be opened or parsed."""


def check_accessible(path: Union[str, Path]) -> bool:
    """True when path names a readable file."""
    if not str(path):
        return False
    path = Path(path)
    if not path.is_file() or not os.access(path, os.R_OK):
        logger.error(f"The input cross-section file [{path}] is not accessible")
        return False
    return True


class CurveSource:
    """
    Interface for a read-only cross-section source.

    Subclasses implement ``directories`` and ``_read_curve``; curve
    construction and interpolation settings are shared here.
    """

    def __init__(self, path: Union[str, Path], interpolation: str = 'linear'):
        self.path = Path(path)
        self.interpolation = interpolation

    def directories(self) -> List[str]:
        raise NotImplementedError

    def categories(self, directory: str) -> List[str]:
        raise NotImplementedError

    def _read_curve(self, directory: str, category: str) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        raise NotImplementedError

    def has_directory(self, directory: str) -> bool:
        return directory in self.directories()

    def get_curve(self, directory: str, category: str) -> Optional[Curve]:
        """
        Curve for (directory, category), or None when absent.

        Points are sorted by energy; empty curves count as absent.
        """
        data = self._read_curve(directory, category)
        if data is None:
            return None
        x, y = data
        if len(x) == 0:
            logger.debug(f"{self.path.name}: {directory}/{category} holds no points")
            return None
        return Curve.from_unsorted(x, y, name=category, interpolation=self.interpolation)

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.path}')"


class RootCurveSource(CurveSource):
    """ROOT file reader (uproot)."""

    def __init__(self, path: Union[str, Path], interpolation: str = 'linear'):
        super().__init__(path, interpolation)
        import uproot

        read_errors = (OSError, ValueError, uproot.deserialization.DeserializationError)
        try:
            self._file = uproot.open(self.path)
        except read_errors as e:
            raise SourceOpenError(f"Cannot open ROOT file {self.path}: {e}") from e

        try:
            classnames = self._file.classnames(recursive=False, cycle=False)
        except read_errors as e:
            self._file.close()
            raise SourceOpenError(f"Cannot list directories of ROOT file {self.path}: {e}") from e

        self._directories = [
            name for name, classname in classnames.items()
            if classname.startswith('TDirectory')
        ]
        self._dir_cache: Dict[str, object] = {}

    def directories(self) -> List[str]:
        return list(self._directories)

    def _directory(self, directory: str):
        if directory not in self._directories:
            return None
        if directory not in self._dir_cache:
            self._dir_cache[directory] = self._file[directory]
        return self._dir_cache[directory]

    def categories(self, directory: str) -> List[str]:
        tdir = self._directory(directory)
        if tdir is None:
            return []
        classnames = tdir.classnames(recursive=False, cycle=False)
        return [name for name, cls in classnames.items() if cls.startswith('TGraph')]

    def _read_curve(self, directory: str, category: str):
        tdir = self._directory(directory)
        if tdir is None:
            return None
        classnames = tdir.classnames(recursive=False, cycle=False)
        classname = classnames.get(category)
        if classname is None or not classname.startswith('TGraph'):
            return None
        graph = tdir[category]
        x = np.asarray(graph.member('fX'), dtype=float)
        y = np.asarray(graph.member('fY'), dtype=float)
        return x, y

    def close(self) -> None:
        self._dir_cache.clear()
        self._file.close()


class TableCurveSource(CurveSource):
    """Long-format table reader (pandas)."""

    def __init__(
        self,
        path: Union[str, Path],
        interpolation: str = 'linear',
        data: Optional[pd.DataFrame] = None,
    ):
        super().__init__(path, interpolation)
        if data is None:
            data = self._load(self.path)

        missing = [c for c in TABLE_COLUMNS if c not in data.columns]
        if missing:
            raise SourceOpenError(
                f"{self.path}: missing required columns {missing}. "
                f"Expected {list(TABLE_COLUMNS)}"
            )

        data = data.loc[:, list(TABLE_COLUMNS)].copy()
        data['directory'] = data['directory'].astype(str)
        data['category'] = data['category'].astype(str)

        # First-appearance order of directories is the page order
        self._directories = list(dict.fromkeys(data['directory'].tolist()))
        self._groups = {
            key: (group['energy'].to_numpy(dtype=float), group['xsec'].to_numpy(dtype=float))
            for key, group in data.groupby(['directory', 'category'], sort=False)
        }
        logger.debug(
            f"Loaded {len(self._groups)} curves in {len(self._directories)} "
            f"directories from {self.path}"
        )

    @staticmethod
    def _load(path: Path) -> pd.DataFrame:
        suffix = path.suffix.lower()
        try:
            if suffix in PARQUET_SUFFIXES:
                return pd.read_parquet(path, engine='pyarrow')
            return pd.read_csv(path)
        except (OSError, ValueError) as e:
            raise SourceOpenError(f"Cannot read table {path}: {e}") from e

    def directories(self) -> List[str]:
        return list(self._directories)

    def categories(self, directory: str) -> List[str]:
        return [cat for (d, cat) in self._groups if d == directory]

    def _read_curve(self, directory: str, category: str):
        return self._groups.get((directory, category))


def open_source(path: Union[str, Path], interpolation: str = 'linear') -> CurveSource:
    """
    Open a cross-section source, choosing the reader from the file suffix.

    Args:
        path: Source file
        interpolation: Evaluation rule attached to the curves it yields

    Returns:
        CurveSource

    Raises:
        SourceOpenError: If the file is missing, unreadable, of an unknown
            type, or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise SourceOpenError(f"Cross-section source not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ROOT_SUFFIXES:
        return RootCurveSource(path, interpolation)
    if suffix in PARQUET_SUFFIXES or suffix in CSV_SUFFIXES:
        return TableCurveSource(path, interpolation)

    raise SourceOpenError(
        f"Unsupported source type '{suffix}' for {path}. "
        f"Expected one of {ROOT_SUFFIXES + PARQUET_SUFFIXES + CSV_SUFFIXES}"
    )
