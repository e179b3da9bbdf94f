"""
Data Module
===========

Read-only access to cross-section sources.

Key Components:
    open_source: Pick a reader (ROOT via uproot, parquet/CSV via pandas)
    CurveStore: Current + optional reference source pair
    NamedCurveSet: Curves of one category, as handed to the report builder
"""

from nuxsec.data.sources import (
    CurveSource,
    RootCurveSource,
    TableCurveSource,
    SourceOpenError,
    TABLE_COLUMNS,
    check_accessible,
    open_source,
)
from nuxsec.data.store import CurveStore, NamedCurveSet

__all__ = [
    "CurveSource",
    "RootCurveSource",
    "TableCurveSource",
    "SourceOpenError",
    "TABLE_COLUMNS",
    "check_accessible",
    "open_source",
    "CurveStore",
    "NamedCurveSet",
]
