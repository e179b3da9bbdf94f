"""
Multi-Curve Aggregation
=======================

Collects labeled curves that share one plot and assigns each a rendering
style that depends only on its insertion index, so re-adding the same
curves in the same order reproduces the same plot.

Style rule for insertion index ``i``:
    color  = COLORS[i % 10]
    marker = MARKERS[(i // 10) % 14]
    marker size 1 (relative), line width 2, solid line

The first 10 entries differ by color at one marker shape, the next 10 reuse
the colors with the second marker shape, and so on: 140 distinct
combinations, after which the sequence wraps around.

Styles are kept as separate CurveStyle records; the curves handed to the
aggregator are never modified.

Example:
    >>> mg = MultiGraphAggregator()
    >>> mg.add('GENIE v3', curve_v3)
    >>> mg.add('GENIE v2', curve_v2)
    >>> fig, ax = plt.subplots()
    >>> mg.draw(ax, options='LP')
    >>> mg.build_legend('L').draw(ax)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from matplotlib.axes import Axes

from nuxsec.curves.curve import Curve

logger = logging.getLogger(__name__)

COLORS = (
    '#000000',  # Black
    '#ff0000',  # Red
    '#0000ff',  # Blue
    '#ff00ff',  # Magenta
    '#00ffff',  # Cyan
    '#59d454',  # Green
    '#5954d9',  # Indigo
    '#d4362b',  # Brick
    '#6b8e9c',  # Slate
    '#c8a37a',  # Tan
)

# (matplotlib marker, filled)
MARKERS = (
    ('+', True),
    ('o', False),
    ('x', True),
    ('o', True),
    ('s', True),
    ('^', True),
    ('v', True),
    ('h', False),
    ('s', False),
    ('^', False),
    ('D', False),
    ('P', False),
    ('*', True),
    ('*', False),
)

N_STYLES = len(COLORS) * len(MARKERS)

# Matplotlib points per relative marker-size unit
MARKER_SIZE_UNIT = 6.0


@dataclass(frozen=True)
class CurveStyle:
    """Rendering attributes of one curve."""

    color: str
    marker: str
    marker_filled: bool = True
    marker_size: float = 1.0
    line_width: float = 2.0
    line_style: str = '-'

    def line_kwargs(self) -> dict:
        return {
            'color': self.color,
            'linewidth': self.line_width,
            'linestyle': self.line_style,
        }

    def marker_kwargs(self) -> dict:
        return {
            'color': self.color,
            'marker': self.marker,
            'markersize': MARKER_SIZE_UNIT * self.marker_size,
            'markerfacecolor': self.color if self.marker_filled else 'none',
            'markeredgecolor': self.color,
            'linestyle': 'none',
        }

    def plot_kwargs(self, option: str) -> dict:
        """Keyword arguments for ``Axes.plot`` under a render option."""
        show_line, show_markers = parse_option(option)
        kwargs = self.marker_kwargs() if show_markers else {'color': self.color, 'marker': ''}
        if show_line:
            kwargs.update(self.line_kwargs())
        else:
            kwargs['linestyle'] = 'none'
        return kwargs


def style_for_index(index: int) -> CurveStyle:
    """Style assigned to insertion index ``index`` (wraps after N_STYLES)."""
    if index < 0:
        raise ValueError(f"Style index must be non-negative, got {index}")
    marker, filled = MARKERS[(index // len(COLORS)) % len(MARKERS)]
    return CurveStyle(
        color=COLORS[index % len(COLORS)],
        marker=marker,
        marker_filled=filled,
    )


def parse_option(option: str) -> tuple:
    """
    Decode a render option string into (show_line, show_markers).

    'L' draws a line, 'P' draws markers, 'LP' both. Case-insensitive.
    """
    option = (option or '').upper()
    show_line = 'L' in option
    show_markers = 'P' in option
    if not (show_line or show_markers):
        raise ValueError(f"Render option must contain 'L' and/or 'P', got '{option}'")
    return show_line, show_markers


@dataclass(frozen=True)
class StyledCurveEntry:
    """A curve, its legend label, and the style assigned to it."""

    index: int
    label: str
    curve: Curve
    style: CurveStyle


@dataclass(frozen=True)
class LegendEntry:
    curve: Curve
    label: str
    style: CurveStyle
    option: str


@dataclass
class Legend:
    """Legend structure pairing each curve with its label and glyph option."""

    entries: List[LegendEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, curve: Curve, label: str, style: CurveStyle, option: str) -> 'Legend':
        parse_option(option)
        self.entries.append(LegendEntry(curve, label, style, option))
        return self

    def clear(self) -> None:
        self.entries.clear()

    def handles(self):
        """Proxy artists for ``Axes.legend`` (one Line2D per entry)."""
        from matplotlib.lines import Line2D

        return [Line2D([], [], **entry.style.plot_kwargs(entry.option)) for entry in self.entries]

    def labels(self) -> List[str]:
        return [entry.label for entry in self.entries]

    def draw(self, ax: Axes, loc: str = 'best', fontsize: int = 9, **kwargs):
        """Draw on ``ax``; returns the matplotlib Legend, or None when empty."""
        if not self.entries:
            return None
        return ax.legend(
            self.handles(), self.labels(),
            loc=loc, fontsize=fontsize, frameon=False, **kwargs
        )


class MultiGraphAggregator:
    """
    Ordered collection of labeled curves with index-determined styles.

    All accessors are bounds-checked and return an empty result
    (None, or '' for labels) for out-of-range indices.
    """

    def __init__(self):
        self._entries: List[StyledCurveEntry] = []
        self._wrapped_warning = False

    def add(self, label: str, curve: Curve) -> StyledCurveEntry:
        """Append a curve and assign its style."""
        index = len(self._entries)
        if index >= N_STYLES and not self._wrapped_warning:
            logger.warning(
                f"More than {N_STYLES} curves on one plot; styles repeat from now on"
            )
            self._wrapped_warning = True

        style = style_for_index(index)
        entry = StyledCurveEntry(index=index, label=label, curve=curve, style=style)
        self._entries.append(entry)

        logger.debug(
            f"Formatting curve {index} - color = {style.color}, marker = {style.marker}"
        )
        return entry

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._entries)

    def entry(self, index: int) -> Optional[StyledCurveEntry]:
        return self._entries[index] if self._in_range(index) else None

    def get(self, index: int) -> Optional[Curve]:
        return self._entries[index].curve if self._in_range(index) else None

    def label(self, index: int) -> str:
        return self._entries[index].label if self._in_range(index) else ''

    def style(self, index: int) -> Optional[CurveStyle]:
        return self._entries[index].style if self._in_range(index) else None

    def _expand_options(self, options: Union[str, Sequence[str]]) -> List[str]:
        if isinstance(options, str):
            return [options] * len(self._entries)
        options = list(options)
        if len(options) != len(self._entries):
            raise ValueError(
                f"Got {len(options)} render options for {len(self._entries)} entries"
            )
        return options

    def build_legend(self, options: Union[str, Sequence[str]] = 'LP') -> Legend:
        """
        Legend of all entries.

        Args:
            options: One render option for every entry, or one per entry

        Raises:
            ValueError: If a per-entry option list has the wrong length
        """
        options = self._expand_options(options)

        legend = Legend()
        for entry, option in zip(self._entries, options):
            legend.add(entry.curve, entry.label, entry.style, option)
        return legend

    def draw(self, ax: Axes, options: Union[str, Sequence[str]] = 'LP') -> None:
        """Plot every entry on ``ax`` with its assigned style."""
        options = self._expand_options(options)
        for entry, option in zip(self._entries, options):
            if entry.curve.is_empty:
                continue
            ax.plot(entry.curve.x, entry.curve.y, **entry.style.plot_kwargs(option))
