"""
Cross-Section Comparison Report
===============================

Multi-page PDF report plotting the cross sections of a "current" source
and, when available, comparing them with a "reference" source.

Report layout:
    - Title page listing the sources
    - One page per (directory, category) found in the current source:
        * header with the category title (probe + target, process)
        * main pane (log-log): current curve as a line, reference curve
          (trimmed to at most K points per decade) as red open circles
        * ratio pane (log-x), only with a reference source:
          current / reference evaluated at the current curve's energies

Processing sequence per category:
    OPEN_CATEGORY -> TRIM -> RATIO -> RENDER_PAGE

A category missing from the current source is skipped without a page. The
run state is kept in a ReportContext created per ``build`` call.

Example:
    >>> from nuxsec.data import CurveStore
    >>> from nuxsec.visualization import ComparisonReportBuilder, ReportConfig
    >>> with CurveStore('xsec-v3.root', 'xsec-v2.root') as store:
    ...     builder = ComparisonReportBuilder(store, ReportConfig(progress=False))
    ...     summary = builder.build('xsec.pdf')
    >>> print(summary.pages)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from tqdm import tqdm

from nuxsec.curves.curve import Curve
from nuxsec.curves.ratio import compute_ratio
from nuxsec.curves.trimming import TrimConfig, trim_curve
from nuxsec.data.store import CurveStore, NamedCurveSet
from nuxsec.physics.categories import CategorySpec, categories_for
from nuxsec.physics.initial_state import InitialState, decode_directory
from nuxsec.visualization.multigraph import CurveStyle, Legend

logger = logging.getLogger(__name__)

# Frame used when no curve is available
DEFAULT_FRAME = (1e-5, 1.0, 1e-5, 1.0)

CURRENT_STYLE = CurveStyle(color='#000000', marker='o', line_width=1.5)
REFERENCE_STYLE = CurveStyle(
    color='#ff0000', marker='o', marker_filled=False, marker_size=0.7, line_width=1.0,
)
RATIO_STYLE = CurveStyle(color='#000000', marker='o', line_width=1.5)


@dataclass
class ReportConfig:
    """Configuration for the comparison report.

    Attributes:
        trim: Reference-curve trimming (max points per decade)
        main_y_scale: (low, high) factors applied to the y range of the main pane
        ratio_y_scale: (low, high) factors applied to the y range of the ratio pane
        x_scale: (low, high) factors applied to the x range of both panes
        x_floor: Lower bound of the x axis after scaling
        figsize: Page size in inches (width, height)
        title: Heading of the title page
        energy_label: x-axis label
        xsec_label: y-axis label of the main pane
        progress: Show a tqdm progress bar over directories
    """

    trim: TrimConfig = field(default_factory=TrimConfig)
    main_y_scale: Tuple[float, float] = (0.5, 1.5)
    ratio_y_scale: Tuple[float, float] = (0.9, 1.1)
    x_scale: Tuple[float, float] = (0.5, 1.5)
    x_floor: float = 0.1
    figsize: Tuple[float, float] = (7.7, 10.0)
    title: str = 'Neutrino cross sections'
    energy_label: str = r'$E_{\nu}$ (GeV)'
    xsec_label: str = r'$\sigma$ ($10^{-38}$ cm$^{2}$)'
    progress: bool = True

    def __post_init__(self):
        for name in ('main_y_scale', 'ratio_y_scale', 'x_scale'):
            scale = getattr(self, name)
            if len(scale) != 2 or min(scale) <= 0:
                raise ValueError(f"{name} must be two positive factors, got {scale}")
        if self.x_floor < 0:
            raise ValueError(f"x_floor must be non-negative, got {self.x_floor}")


@dataclass(frozen=True)
class Frame:
    """Axis ranges of one pane."""

    xmin: float
    xmax: float
    ymin: float
    ymax: float


def compute_frame(
    curves: Sequence[Optional[Curve]],
    y_scale: Tuple[float, float],
    x_scale: Tuple[float, float] = (0.5, 1.5),
    x_floor: float = 0.1,
    positive_y: bool = False,
) -> Frame:
    """
    Axis ranges covering all present curves, expanded by scale factors.

    Args:
        curves: Curves to cover; None and empty entries are ignored
        y_scale: (low, high) factors widening ymin / ymax; a negative bound
            takes the other factor so the frame always contains the data
        x_scale: (low, high) factors applied to xmin / xmax
        x_floor: xmin is raised to at least this value after scaling
        positive_y: Use the smallest positive y as ymin (log-scale axes)

    Returns:
        Frame
    """
    present = [c for c in curves if c is not None and not c.is_empty]

    if present:
        xmin = min(c.x_range()[0] for c in present)
        xmax = max(c.x_range()[1] for c in present)
        ymin = min(c.y_range()[0] for c in present)
        ymax = max(c.y_range()[1] for c in present)
        if positive_y and ymin <= 0:
            positive = [float(c.y[c.y > 0].min()) for c in present if (c.y > 0).any()]
            ymin = min(positive) if positive else DEFAULT_FRAME[2]
            ymax = max(ymax, ymin)
    else:
        xmin, xmax, ymin, ymax = DEFAULT_FRAME

    xmin, xmax = _widen(xmin, xmax, x_scale)
    ymin, ymax = _widen(ymin, ymax, y_scale)
    xmin = max(x_floor, xmin)

    return Frame(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def _widen(low: float, high: float, scale: Tuple[float, float]) -> Tuple[float, float]:
    """Scale both bounds away from the data; negative bounds swap factors."""
    low *= scale[0] if low >= 0 else scale[1]
    high *= scale[1] if high >= 0 else scale[0]
    return low, high


class ReportState(Enum):
    INIT = 'init'
    OPEN_CATEGORY = 'open_category'
    TRIM = 'trim'
    RATIO = 'ratio'
    RENDER_PAGE = 'render_page'
    CLOSED = 'closed'


_TRANSITIONS = {
    ReportState.INIT: {ReportState.OPEN_CATEGORY, ReportState.CLOSED},
    ReportState.OPEN_CATEGORY: {ReportState.TRIM, ReportState.OPEN_CATEGORY, ReportState.CLOSED},
    ReportState.TRIM: {ReportState.RATIO},
    ReportState.RATIO: {ReportState.RENDER_PAGE},
    ReportState.RENDER_PAGE: {ReportState.OPEN_CATEGORY, ReportState.CLOSED},
    ReportState.CLOSED: set(),
}


@dataclass
class ReportContext:
    """Mutable state of one report run."""

    output_path: Path
    has_reference: bool
    state: ReportState = ReportState.INIT
    pages: int = 0
    rendered: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    directories_skipped: List[str] = field(default_factory=list)
    directory: Optional[str] = None
    initial_state: Optional[InitialState] = None

    def transition(self, new_state: ReportState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid report transition {self.state.name} -> {new_state.name}"
            )
        self.state = new_state


@dataclass(frozen=True)
class ReportSummary:
    """Outcome of a report run.

    Attributes:
        output_path: Written document
        pages: Total page count, title page included
        categories_rendered: (directory, category) pairs with a page
        categories_skipped: (directory, category) pairs absent from the current source
        directories_skipped: Directories whose probe could not be decoded
    """

    output_path: Path
    pages: int
    categories_rendered: Tuple[Tuple[str, str], ...]
    categories_skipped: Tuple[Tuple[str, str], ...]
    directories_skipped: Tuple[str, ...]

    @property
    def content_pages(self) -> int:
        return len(self.categories_rendered)


class ComparisonReportBuilder:
    """
    Builds the comparison report from a CurveStore.

    Args:
        store: Open current (+ optional reference) sources
        config: ReportConfig. None uses defaults.
    """

    def __init__(self, store: CurveStore, config: Optional[ReportConfig] = None):
        self.store = store
        self.config = config if config is not None else ReportConfig()

    def build(
        self,
        output_path: Union[str, Path],
        directories: Optional[Sequence[str]] = None,
    ) -> ReportSummary:
        """
        Write the report.

        Args:
            output_path: PDF file to create
            directories: Restrict to these directories (default: all
                directories of the current source, in source order)

        Returns:
            ReportSummary
        """
        output_path = Path(output_path)
        if output_path.parent and not output_path.parent.exists():
            output_path.parent.mkdir(parents=True, exist_ok=True)

        ctx = ReportContext(output_path=output_path, has_reference=self.store.has_reference)
        if directories is None:
            directories = self.store.directories()

        with PdfPages(output_path) as pdf:
            self._emit(pdf, ctx, self.render_title_page())

            for directory in tqdm(
                directories, desc="Plotting directories", disable=not self.config.progress
            ):
                self._process_directory(pdf, ctx, directory)

            ctx.transition(ReportState.CLOSED)

        logger.info(
            f"Report written to {output_path}: {ctx.pages} pages "
            f"({len(ctx.rendered)} categories, {len(ctx.skipped)} skipped)"
        )
        return ReportSummary(
            output_path=output_path,
            pages=ctx.pages,
            categories_rendered=tuple(ctx.rendered),
            categories_skipped=tuple(ctx.skipped),
            directories_skipped=tuple(ctx.directories_skipped),
        )

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    def _process_directory(self, pdf: PdfPages, ctx: ReportContext, directory: str) -> None:
        logger.info(f"Plotting graphs from directory: {directory}")

        initial_state = decode_directory(directory)
        if initial_state is None:
            ctx.directories_skipped.append(directory)
            return

        ctx.directory = directory
        ctx.initial_state = initial_state
        logger.info(f"Probe  : {initial_state.probe.name}")
        logger.info(f"Target : {initial_state.target}")

        if self.store.has_reference and not self.store.reference_has_directory(directory):
            logger.info("No reference plots will be shown.")

        for spec in categories_for(initial_state):
            self._process_category(pdf, ctx, spec)

    def _process_category(self, pdf: PdfPages, ctx: ReportContext, spec: CategorySpec) -> None:
        ctx.transition(ReportState.OPEN_CATEGORY)
        title = spec.title(ctx.initial_state)
        curves = self.store.load(ctx.directory, spec.name, label=title)
        if curves.current is None:
            logger.debug(f"{ctx.directory}/{spec.name}: not in current source, skipping")
            ctx.skipped.append((ctx.directory, spec.name))
            return

        ctx.transition(ReportState.TRIM)
        trimmed = trim_curve(curves.reference, self.config.trim.max_points_per_decade)

        ctx.transition(ReportState.RATIO)
        ratio = compute_ratio(curves.current, curves.reference) if ctx.has_reference else None

        ctx.transition(ReportState.RENDER_PAGE)
        fig = self.render_page(curves, trimmed, ratio, show_ratio=ctx.has_reference)
        self._emit(pdf, ctx, fig)
        ctx.rendered.append((ctx.directory, spec.name))

    def _emit(self, pdf: PdfPages, ctx: ReportContext, fig: Figure) -> None:
        try:
            pdf.savefig(fig)
        finally:
            plt.close(fig)
        ctx.pages += 1

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render_title_page(self) -> Figure:
        """Front page naming the current and reference sources."""
        lines = [self.config.title, '', '', 'Plotting data from:', str(self.store.current_path)]
        if self.store.has_reference:
            lines += [
                '',
                'Comparing with reference data (red circles) from:',
                str(self.store.reference_path),
            ]

        fig = plt.figure(figsize=self.config.figsize)
        fig.text(
            0.5, 0.55, '\n'.join(lines),
            ha='center', va='center', fontsize=12,
            bbox={'boxstyle': 'round', 'facecolor': 'white', 'edgecolor': 'gray'},
        )
        return fig

    def render_page(
        self,
        curves: NamedCurveSet,
        trimmed_reference: Optional[Curve],
        ratio: Optional[Curve],
        show_ratio: bool,
    ) -> Figure:
        """
        One category page.

        Args:
            curves: Current and (untrimmed) reference curves with the title
            trimmed_reference: Reference curve to draw as markers
            ratio: current / reference curve, or None
            show_ratio: Add the ratio pane (a reference source is present)

        Returns:
            Figure (caller closes it)
        """
        cfg = self.config
        fig = plt.figure(figsize=cfg.figsize)
        if show_ratio:
            grid = fig.add_gridspec(3, 1, height_ratios=[0.07, 0.58, 0.35], hspace=0.3)
        else:
            grid = fig.add_gridspec(2, 1, height_ratios=[0.07, 0.93], hspace=0.2)

        ax_title = fig.add_subplot(grid[0])
        ax_title.axis('off')
        ax_title.text(
            0.5, 0.5, curves.label, ha='center', va='center', fontsize=12,
            bbox={'boxstyle': 'round', 'facecolor': 'white', 'edgecolor': 'gray'},
        )

        ax_xsec = fig.add_subplot(grid[1])
        self._draw_xsec_pane(ax_xsec, curves, trimmed_reference)

        if show_ratio:
            ax_ratio = fig.add_subplot(grid[2])
            self._draw_ratio_pane(ax_ratio, ratio)

        return fig

    def _draw_xsec_pane(
        self,
        ax: Axes,
        curves: NamedCurveSet,
        trimmed_reference: Optional[Curve],
    ) -> None:
        cfg = self.config
        frame = compute_frame(
            [curves.current, curves.reference],
            y_scale=cfg.main_y_scale,
            x_scale=cfg.x_scale,
            x_floor=cfg.x_floor,
            positive_y=True,
        )
        _apply_frame(ax, frame, cfg.energy_label, cfg.xsec_label, log_y=True)

        legend = Legend()
        if curves.current is not None:
            ax.plot(curves.current.x, curves.current.y, **CURRENT_STYLE.plot_kwargs('L'))
            legend.add(curves.current, self.store.current_label, CURRENT_STYLE, 'L')
        if trimmed_reference is not None and not trimmed_reference.is_empty:
            ax.plot(
                trimmed_reference.x, trimmed_reference.y,
                **REFERENCE_STYLE.plot_kwargs('P'),
            )
            legend.add(trimmed_reference, self.store.reference_label, REFERENCE_STYLE, 'P')
        legend.draw(ax, loc='lower right')

    def _draw_ratio_pane(self, ax: Axes, ratio: Optional[Curve]) -> None:
        cfg = self.config
        frame = compute_frame(
            [ratio], y_scale=cfg.ratio_y_scale, x_scale=cfg.x_scale, x_floor=cfg.x_floor,
        )
        ylabel = f"{self.store.current_label} / {self.store.reference_label}"
        _apply_frame(ax, frame, cfg.energy_label, ylabel, log_y=False)

        if ratio is None or ratio.is_empty:
            ax.text(
                0.5, 0.5, 'no reference curve', transform=ax.transAxes,
                ha='center', va='center', color='gray',
            )
            return
        ax.plot(ratio.x, ratio.y, **RATIO_STYLE.plot_kwargs('L'))


def _apply_frame(ax: Axes, frame: Frame, xlabel: str, ylabel: str, log_y: bool) -> None:
    ax.set_xscale('log')
    if log_y:
        ax.set_yscale('log')
    if frame.xmax > frame.xmin:
        ax.set_xlim(frame.xmin, frame.xmax)
    if frame.ymax > frame.ymin:
        ax.set_ylim(frame.ymin, frame.ymax)
    ax.grid(True, alpha=0.3, which='both')
    ax.set_xlabel(xlabel, fontsize=10)
    ax.set_ylabel(ylabel, fontsize=10)
    ax.tick_params(labelsize=9)
