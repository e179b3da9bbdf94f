"""
nuxsec: Neutrino Cross-Section Comparison Toolkit
=================================================

Plots pre-calculated neutrino cross sections and compares them against a
reference set, page by page, with current/reference ratio panes.

Modules:
    curves: Cross-section curves, decade trimming, point-wise ratios
    data: Cross-section sources (ROOT via uproot, parquet/CSV via pandas)
    physics: Probe/target decoding and the category catalog
    visualization: Comparison report, multi-curve styling, overlays
    apps: Command-line utilities

License: MIT
"""

__version__ = "1.0.0"

from nuxsec import curves, data, physics, visualization

__all__ = [
    "curves",
    "data",
    "physics",
    "visualization",
]
