"""
nuxsec Visualization Module
===========================

Plotting of neutrino cross-section curves.

Main Classes:
    ComparisonReportBuilder: Multi-page current-vs-reference PDF report
    MultiGraphAggregator: Deterministic styling of many curves on one plot
    OverlayFigure: One plot of several labeled curves

Example:
    >>> from nuxsec.data import CurveStore
    >>> from nuxsec.visualization import ComparisonReportBuilder
    >>>
    >>> with CurveStore('xsec-v3.root', 'xsec-v2.root') as store:
    ...     summary = ComparisonReportBuilder(store).build('xsec.pdf')
    >>>
    >>> from nuxsec.visualization import plot_overlay
    >>> fig = plot_overlay([('v3.root', 'v3'), ('v2.root', 'v2')],
    ...                    'nu_mu_O16', 'tot_cc', save_path='tot_cc.png')
"""

from .multigraph import (
    MultiGraphAggregator,
    StyledCurveEntry,
    CurveStyle,
    Legend,
    LegendEntry,
    style_for_index,
    COLORS,
    MARKERS,
)
from .comparison_report import (
    ComparisonReportBuilder,
    ReportConfig,
    ReportContext,
    ReportState,
    ReportSummary,
    Frame,
    compute_frame,
)
from .overlay import OverlayFigure, plot_overlay

__all__ = [
    'MultiGraphAggregator', 'StyledCurveEntry', 'CurveStyle', 'Legend', 'LegendEntry',
    'style_for_index', 'COLORS', 'MARKERS',
    'ComparisonReportBuilder', 'ReportConfig', 'ReportContext', 'ReportState',
    'ReportSummary', 'Frame', 'compute_frame',
    'OverlayFigure', 'plot_overlay',
]
