"""
Cross-Section Overlay Figure
============================

One log-log plot holding many labeled cross-section curves (e.g. the same
category from several model versions), styled by MultiGraphAggregator so
the n-th curve always gets the same color/marker.

Example:
    >>> fig = OverlayFigure(title=r'$\\nu_{\\mu}$ + O16, TOT CC')
    >>> fig.add_curve(curve_v3, 'v3').add_curve(curve_v2, 'v2')
    >>> fig.add_legend()
    >>> fig.save('tot_cc_overlay.pdf')
    >>>
    >>> # Same category from several files
    >>> fig = plot_overlay([('v3.root', 'v3'), ('v2.root', 'v2')],
    ...                    'nu_mu_O16', 'tot_cc', save_path='overlay.png')
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from nuxsec.curves.curve import Curve
from nuxsec.data.sources import SourceOpenError, open_source
from nuxsec.physics.categories import get_category
from nuxsec.physics.initial_state import decode_directory
from nuxsec.visualization.multigraph import MultiGraphAggregator

logger = logging.getLogger(__name__)


class OverlayFigure:
    """
    Log-log figure of several labeled curves.

    Attributes:
        graphs: MultiGraphAggregator holding the curves and their styles
        fig: Matplotlib Figure
        ax: Matplotlib Axes
    """

    def __init__(
        self,
        title: Optional[str] = None,
        figsize: Tuple[float, float] = (10, 7),
        energy_label: str = r'$E_{\nu}$ (GeV)',
        xsec_label: str = r'$\sigma$ ($10^{-38}$ cm$^{2}$)',
        options: str = 'LP',
    ):
        self.graphs = MultiGraphAggregator()
        self.options = options

        self.fig, self.ax = plt.subplots(figsize=figsize)
        self.ax.set_xscale('log')
        self.ax.set_yscale('log')
        self.ax.grid(True, alpha=0.3, which='both')
        self.ax.set_xlabel(energy_label, fontsize=12, fontweight='bold')
        self.ax.set_ylabel(xsec_label, fontsize=12, fontweight='bold')
        if title:
            self.ax.set_title(title, fontsize=14, fontweight='bold')

    def add_curve(self, curve: Optional[Curve], label: str) -> 'OverlayFigure':
        """Add a curve; None (absent) is ignored."""
        if curve is None:
            logger.debug(f"No curve for '{label}', not added")
            return self
        entry = self.graphs.add(label, curve)
        if not curve.is_empty:
            self.ax.plot(curve.x, curve.y, **entry.style.plot_kwargs(self.options))
        return self

    def add_legend(self, loc: str = 'best', fontsize: int = 10, **kwargs) -> 'OverlayFigure':
        self.graphs.build_legend(self.options).draw(self.ax, loc=loc, fontsize=fontsize, **kwargs)
        return self

    def save(self, filepath: Union[str, Path], dpi: int = 300, **kwargs) -> 'OverlayFigure':
        self.fig.tight_layout()
        self.fig.savefig(filepath, dpi=dpi, bbox_inches='tight', **kwargs)
        logger.info(f"Figure saved to {filepath}")
        return self

    def get_figure(self) -> Tuple[Figure, Axes]:
        return self.fig, self.ax

    def close(self) -> None:
        plt.close(self.fig)


def overlay_title(directory: str, category: str) -> str:
    """Page-style title for a directory/category pair, falling back to raw names."""
    state = decode_directory(directory)
    spec = get_category(category)
    if state is None or spec is None:
        return f"{directory}: {category}"
    return spec.title(state)


def plot_overlay(
    sources: Sequence[Tuple[Union[str, Path], str]],
    directory: str,
    category: str,
    save_path: Optional[Union[str, Path]] = None,
    interpolation: str = 'linear',
    **kwargs,
) -> OverlayFigure:
    """
    Overlay one category read from several sources.

    Sources that cannot be opened, or that lack the curve, are logged and
    left out.

    Args:
        sources: (path, label) pairs
        directory: Probe+target directory name
        category: Category name
        save_path: Write the figure here when given
        interpolation: Evaluation rule for loaded curves
        **kwargs: Passed to OverlayFigure

    Returns:
        OverlayFigure
    """
    kwargs.setdefault('title', overlay_title(directory, category))
    fig = OverlayFigure(**kwargs)

    for path, label in sources:
        try:
            with open_source(path, interpolation) as source:
                curve = source.get_curve(directory, category)
        except SourceOpenError as e:
            logger.warning(f"Skipping source '{label}': {e}")
            continue
        if curve is None:
            logger.warning(f"Source '{label}' has no {directory}/{category}")
            continue
        fig.add_curve(curve, label)

    if len(fig.graphs) > 0:
        fig.add_legend()

    if save_path is not None:
        fig.save(save_path)

    return fig
