"""Tests for index-determined curve styling and legend building."""

import logging

import matplotlib.pyplot as plt
import numpy as np
import pytest

from nuxsec.curves import Curve
from nuxsec.visualization.multigraph import (
    COLORS,
    MARKERS,
    N_STYLES,
    Legend,
    MultiGraphAggregator,
    parse_option,
    style_for_index,
)


def _curve(scale=1.0, name=''):
    x = np.logspace(-1, 1, 10)
    return Curve(x, scale * x, name=name)


# ---------------------------------------------------------------------------
# Style rule
# ---------------------------------------------------------------------------

class TestStyleForIndex:
    def test_first(self):
        style = style_for_index(0)
        assert style.color == COLORS[0]
        assert (style.marker, style.marker_filled) == MARKERS[0]
        assert style.marker_size == 1.0
        assert style.line_width == 2.0
        assert style.line_style == '-'

    def test_last_color_first_marker(self):
        style = style_for_index(9)
        assert style.color == COLORS[9]
        assert (style.marker, style.marker_filled) == MARKERS[0]

    def test_colors_cycle_then_marker_advances(self):
        style = style_for_index(10)
        assert style.color == COLORS[0]
        assert (style.marker, style.marker_filled) == MARKERS[1]

    def test_last_distinct_style(self):
        style = style_for_index(N_STYLES - 1)
        assert style.color == COLORS[9]
        assert (style.marker, style.marker_filled) == MARKERS[13]

    def test_wraps_after_all_combinations(self):
        assert N_STYLES == 140
        assert style_for_index(140) == style_for_index(0)
        assert style_for_index(151) == style_for_index(11)

    def test_all_combinations_distinct(self):
        styles = {style_for_index(i) for i in range(N_STYLES)}
        assert len(styles) == N_STYLES

    def test_negative_index(self):
        with pytest.raises(ValueError):
            style_for_index(-1)


class TestParseOption:
    @pytest.mark.parametrize('option, expected', [
        ('L', (True, False)),
        ('P', (False, True)),
        ('LP', (True, True)),
        ('lp', (True, True)),
    ])
    def test_valid(self, option, expected):
        assert parse_option(option) == expected

    @pytest.mark.parametrize('option', ['', 'X', None])
    def test_invalid(self, option):
        with pytest.raises(ValueError):
            parse_option(option)

    def test_plot_kwargs(self):
        style = style_for_index(1)
        line = style.plot_kwargs('L')
        assert line['linestyle'] == '-'
        assert line['marker'] == ''
        points = style.plot_kwargs('P')
        assert points['linestyle'] == 'none'
        assert points['marker'] == MARKERS[0][0]

    def test_open_marker(self):
        # MARKERS[1] is an open circle
        kwargs = style_for_index(10).plot_kwargs('P')
        assert kwargs['markerfacecolor'] == 'none'


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------

class TestMultiGraphAggregator:
    def test_add_and_accessors(self):
        mg = MultiGraphAggregator()
        first, second = _curve(1.0), _curve(2.0)
        mg.add('v3', first)
        mg.add('v2', second)

        assert mg.count() == 2
        assert len(mg) == 2
        assert mg.get(0) is first
        assert mg.get(1) is second
        assert mg.label(1) == 'v2'
        assert mg.style(1) == style_for_index(1)
        assert [e.index for e in mg] == [0, 1]

    def test_out_of_range(self):
        mg = MultiGraphAggregator()
        mg.add('only', _curve())
        assert mg.get(5) is None
        assert mg.get(-1) is None
        assert mg.label(5) == ''
        assert mg.style(3) is None
        assert mg.entry(1) is None

    def test_curves_not_modified(self):
        curve = _curve(3.0, name='tot_cc')
        x_before, y_before = curve.x.copy(), curve.y.copy()
        mg = MultiGraphAggregator()
        mg.add('a', curve)
        fig, ax = plt.subplots()
        try:
            mg.draw(ax, 'LP')
        finally:
            plt.close(fig)
        np.testing.assert_array_equal(curve.x, x_before)
        np.testing.assert_array_equal(curve.y, y_before)
        assert curve.name == 'tot_cc'

    def test_deterministic(self):
        labels = [f'model {i}' for i in range(25)]
        first, second = MultiGraphAggregator(), MultiGraphAggregator()
        for label in labels:
            first.add(label, _curve())
            second.add(label, _curve())
        assert [e.style for e in first] == [e.style for e in second]

    def test_warns_once_past_distinct_styles(self, caplog):
        mg = MultiGraphAggregator()
        curve = _curve()
        with caplog.at_level(logging.WARNING, logger='nuxsec.visualization.multigraph'):
            for i in range(N_STYLES + 5):
                mg.add(str(i), curve)
        warnings = [r for r in caplog.records if 'styles repeat' in r.getMessage()]
        assert len(warnings) == 1
        assert mg.style(N_STYLES) == style_for_index(0)

    def test_draw_skips_empty_curves(self):
        mg = MultiGraphAggregator()
        mg.add('a', _curve())
        mg.add('empty', Curve([], []))
        mg.add('b', _curve(2.0))
        fig, ax = plt.subplots()
        try:
            mg.draw(ax, 'L')
            assert len(ax.lines) == 2
        finally:
            plt.close(fig)

    def test_draw_option_count_mismatch(self):
        mg = MultiGraphAggregator()
        mg.add('a', _curve())
        mg.add('b', _curve(2.0))
        fig, ax = plt.subplots()
        try:
            with pytest.raises(ValueError, match="render options"):
                mg.draw(ax, ['L'])
            assert len(ax.lines) == 0
            mg.draw(ax, ['L', 'P'])
            assert len(ax.lines) == 2
        finally:
            plt.close(fig)


class TestLegend:
    def test_build_legend_single_option(self):
        mg = MultiGraphAggregator()
        mg.add('v3', _curve())
        mg.add('v2', _curve())
        legend = mg.build_legend('L')
        assert len(legend) == 2
        assert legend.labels() == ['v3', 'v2']
        assert [e.option for e in legend.entries] == ['L', 'L']

    def test_build_legend_per_entry(self):
        mg = MultiGraphAggregator()
        mg.add('v3', _curve())
        mg.add('v2', _curve())
        legend = mg.build_legend(['L', 'P'])
        assert [e.option for e in legend.entries] == ['L', 'P']
        assert legend.entries[1].style == style_for_index(1)

    def test_option_count_mismatch(self):
        mg = MultiGraphAggregator()
        mg.add('v3', _curve())
        with pytest.raises(ValueError):
            mg.build_legend(['L', 'P'])

    def test_invalid_option(self):
        with pytest.raises(ValueError):
            Legend().add(_curve(), 'x', style_for_index(0), 'Q')

    def test_draw(self):
        mg = MultiGraphAggregator()
        mg.add('v3', _curve())
        fig, ax = plt.subplots()
        try:
            assert Legend().draw(ax) is None
            drawn = mg.build_legend('LP').draw(ax)
            assert [t.get_text() for t in drawn.get_texts()] == ['v3']
        finally:
            plt.close(fig)
