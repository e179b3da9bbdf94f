"""Tests for the comparison report: frames, run state and page output."""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from nuxsec.curves import Curve, TrimConfig, compute_ratio, trim_curve
from nuxsec.data import CurveStore, TableCurveSource
from nuxsec.visualization import (
    ComparisonReportBuilder,
    ReportConfig,
    ReportContext,
    ReportState,
    compute_frame,
)


def _config(**kwargs):
    kwargs.setdefault('progress', False)
    return ReportConfig(**kwargs)


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

class TestComputeFrame:
    def test_scaled_range(self):
        frame = compute_frame([Curve([1.0, 10.0], [2.0, 4.0])], y_scale=(0.5, 1.5))
        assert frame.xmin == pytest.approx(0.5)
        assert frame.xmax == pytest.approx(15.0)
        assert frame.ymin == pytest.approx(1.0)
        assert frame.ymax == pytest.approx(6.0)

    def test_covers_all_curves(self):
        a = Curve([1.0, 10.0], [2.0, 4.0])
        b = Curve([2.0, 100.0], [1.0, 8.0])
        frame = compute_frame([a, None, b], y_scale=(0.9, 1.1))
        assert frame.xmax == pytest.approx(150.0)
        assert frame.ymin == pytest.approx(0.9)
        assert frame.ymax == pytest.approx(8.8)

    def test_x_floor(self):
        frame = compute_frame([Curve([0.01, 1.0], [1.0, 1.0])], y_scale=(0.5, 1.5))
        assert frame.xmin == pytest.approx(0.1)

    def test_default_frame(self):
        frame = compute_frame([None, Curve([], [])], y_scale=(0.5, 1.5))
        assert frame.xmin == pytest.approx(0.1)
        assert frame.xmax == pytest.approx(1.5)
        assert frame.ymin == pytest.approx(0.5e-5)
        assert frame.ymax == pytest.approx(1.5)

    def test_positive_y(self):
        curve = Curve([1.0, 2.0, 3.0], [0.0, 2.0, 4.0])
        assert compute_frame([curve], (0.5, 1.5)).ymin == 0.0
        assert compute_frame([curve], (0.5, 1.5), positive_y=True).ymin == pytest.approx(1.0)

    def test_ratio_sentinel_inside_frame(self):
        x = [1.0, 2.0, 3.0]
        ratio = compute_ratio(Curve(x, [0.0, 1.0, 1.0]), Curve(x, [1.0, 1.0, 1.0]))
        np.testing.assert_array_equal(ratio.y, [-1.0, 1.0, 1.0])
        frame = compute_frame([ratio], y_scale=(0.9, 1.1))
        assert frame.ymin <= ratio.y.min()
        assert frame.ymin == pytest.approx(-1.1)
        assert frame.ymax == pytest.approx(1.1)

    def test_all_negative_range(self):
        frame = compute_frame([Curve([1.0, 2.0], [-4.0, -2.0])], y_scale=(0.5, 1.5))
        assert frame.ymin == pytest.approx(-6.0)
        assert frame.ymax == pytest.approx(-1.0)
        assert frame.ymax > frame.ymin


class TestReportConfig:
    def test_defaults(self):
        cfg = ReportConfig()
        assert cfg.trim.max_points_per_decade == 20
        assert cfg.main_y_scale == (0.5, 1.5)
        assert cfg.ratio_y_scale == (0.9, 1.1)

    def test_rejects_bad_scale(self):
        with pytest.raises(ValueError):
            ReportConfig(main_y_scale=(0.0, 1.5))

    def test_rejects_negative_floor(self):
        with pytest.raises(ValueError):
            ReportConfig(x_floor=-1.0)


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------

class TestReportContext:
    def test_category_sequence(self, tmp_path):
        ctx = ReportContext(output_path=tmp_path / 'x.pdf', has_reference=True)
        for state in (
            ReportState.OPEN_CATEGORY, ReportState.TRIM, ReportState.RATIO,
            ReportState.RENDER_PAGE, ReportState.OPEN_CATEGORY, ReportState.CLOSED,
        ):
            ctx.transition(state)
        assert ctx.state is ReportState.CLOSED

    def test_skip_category(self, tmp_path):
        ctx = ReportContext(output_path=tmp_path / 'x.pdf', has_reference=False)
        ctx.transition(ReportState.OPEN_CATEGORY)
        ctx.transition(ReportState.OPEN_CATEGORY)
        ctx.transition(ReportState.CLOSED)

    @pytest.mark.parametrize('start, target', [
        (ReportState.INIT, ReportState.TRIM),
        (ReportState.TRIM, ReportState.RENDER_PAGE),
        (ReportState.CLOSED, ReportState.OPEN_CATEGORY),
    ])
    def test_invalid_transition(self, tmp_path, start, target):
        ctx = ReportContext(output_path=tmp_path / 'x.pdf', has_reference=True, state=start)
        with pytest.raises(RuntimeError, match="Invalid report transition"):
            ctx.transition(target)


# ---------------------------------------------------------------------------
# Report output
# ---------------------------------------------------------------------------

class TestComparisonReportBuilder:
    def test_current_only(self, current_csv, tmp_path):
        out = tmp_path / 'xsec.pdf'
        with CurveStore(current_csv) as store:
            summary = ComparisonReportBuilder(store, _config()).build(out)

        assert out.is_file() and out.stat().st_size > 0
        assert summary.categories_rendered == (
            ('nu_mu_O16', 'tot_cc'),
            ('nu_mu_O16', 'qel_cc_n'),
            ('nu_e_n', 'qel_cc_n'),
        )
        assert summary.pages == 4
        assert summary.content_pages == 3
        assert ('nu_mu_O16', 'dis_cc_n') in summary.categories_skipped

    def test_with_reference(self, current_csv, reference_csv, tmp_path):
        out = tmp_path / 'cmp.pdf'
        with CurveStore(current_csv, reference_csv, 'v3', 'v2') as store:
            summary = ComparisonReportBuilder(store, _config()).build(out)
        assert out.is_file()
        assert summary.pages == 4

    def test_no_matching_categories(self, tmp_path):
        df = pd.DataFrame({
            'directory': ['nu_e_n'] * 3,
            'category': ['not_a_category'] * 3,
            'energy': [1.0, 2.0, 3.0],
            'xsec': [1.0, 2.0, 3.0],
        })
        store = CurveStore.from_sources(TableCurveSource(tmp_path / 'mem.csv', data=df))
        summary = ComparisonReportBuilder(store, _config()).build(tmp_path / 'empty.pdf')
        assert summary.pages == 1
        assert summary.content_pages == 0

    def test_undecodable_directory(self, tmp_path):
        df = pd.DataFrame({
            'directory': ['geantino_O16'] * 2,
            'category': ['tot_cc'] * 2,
            'energy': [1.0, 2.0],
            'xsec': [1.0, 2.0],
        })
        store = CurveStore.from_sources(TableCurveSource(tmp_path / 'mem.csv', data=df))
        summary = ComparisonReportBuilder(store, _config()).build(tmp_path / 'skip.pdf')
        assert summary.directories_skipped == ('geantino_O16',)
        assert summary.pages == 1

    def test_directory_subset(self, current_csv, tmp_path):
        with CurveStore(current_csv) as store:
            summary = ComparisonReportBuilder(store, _config()).build(
                tmp_path / 'sub.pdf', directories=['nu_e_n'],
            )
        assert summary.categories_rendered == (('nu_e_n', 'qel_cc_n'),)

    def test_root_source(self, current_root, reference_csv, tmp_path):
        out = tmp_path / 'root.pdf'
        with CurveStore(current_root, reference_csv, 'v3', 'v2') as store:
            summary = ComparisonReportBuilder(store, _config()).build(out)
        assert out.is_file()
        assert sorted(summary.categories_rendered) == [
            ('nu_e_n', 'qel_cc_n'),
            ('nu_mu_O16', 'qel_cc_n'),
            ('nu_mu_O16', 'tot_cc'),
        ]
        assert summary.pages == 4

    def test_render_page_with_ratio_pane(self, tmp_path):
        x = np.linspace(1.0, 9.0, 200)
        df = pd.DataFrame({
            'directory': 'nu_mu_O16', 'category': 'tot_cc', 'energy': x, 'xsec': 0.7 * x,
        })
        store = CurveStore.from_sources(
            TableCurveSource(tmp_path / 'a.csv', data=df),
            TableCurveSource(tmp_path / 'b.csv', data=df),
        )
        builder = ComparisonReportBuilder(store, _config(trim=TrimConfig(10)))
        curves = store.load('nu_mu_O16', 'tot_cc', label='TOT CC')
        trimmed = trim_curve(curves.reference, builder.config.trim.max_points_per_decade)
        ratio = compute_ratio(curves.current, curves.reference)
        np.testing.assert_allclose(ratio.y, 1.0)
        fig = builder.render_page(curves, trimmed, ratio, show_ratio=True)
        try:
            assert len(fig.axes) == 3
        finally:
            plt.close(fig)
