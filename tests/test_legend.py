"""Tests for LegendBuilder."""

import pytest

from table_heatmap.core.color_scale import ColorScaleBuilder
from table_heatmap.layout.grid_layout import GridLayoutEngine
from table_heatmap.layout.legend_layout import LegendBuilder


@pytest.fixture
def gradient_legend(abc_chart, gradient_settings, viewport, metrics):
    scale = ColorScaleBuilder.build(gradient_settings, (1.0, 10.0))
    geometry = GridLayoutEngine().compute(
        abc_chart, gradient_settings, viewport, metrics, bucket_count=scale.bucket_count,
    )
    legend = LegendBuilder.build(scale, 1.0, 10.0, geometry, abc_chart.y_formatter)
    return scale, geometry, legend


class TestBreakpoints:
    def test_min_then_quantiles(self, gradient_settings):
        scale = ColorScaleBuilder.build(gradient_settings, (1.0, 10.0))
        assert LegendBuilder.breakpoints(scale, 1.0) == pytest.approx([1.0, 4.0, 7.0])

    def test_one_per_bucket(self, default_settings):
        scale = ColorScaleBuilder.build(default_settings, (0.0, 100.0))
        assert len(LegendBuilder.breakpoints(scale, 0.0)) == scale.bucket_count


class TestLegendEntries:
    def test_labels(self, gradient_legend):
        _, _, legend = gradient_legend
        assert [e.label for e in legend.entries] == ["1", "4", "7"]
        assert legend.max_label == "10"

    def test_colors_follow_buckets(self, gradient_legend):
        scale, _, legend = gradient_legend
        assert tuple(e.color for e in legend.entries) == scale.colors

    def test_swatches_side_by_side(self, gradient_legend):
        _, geometry, legend = gradient_legend
        w = geometry.legend_element_width
        for i, entry in enumerate(legend.entries):
            assert entry.rect.x == pytest.approx(w * i + geometry.x_offset)
            assert entry.rect.width == pytest.approx(w)
            assert entry.rect.height == geometry.cell_height

    def test_swatch_row_below_grid(self, gradient_legend):
        _, _, legend = gradient_legend
        # top margin + 1.5 cell heights + x axis height
        assert all(e.rect.y == pytest.approx(10 + 60 * 1.5 + 14.4) for e in legend.entries)

    def test_tooltips_span_to_next_breakpoint(self, gradient_legend):
        _, _, legend = gradient_legend
        assert legend.entries[0].tooltip == (("Min value", "1"), ("Max value", "4"))
        assert legend.entries[-1].tooltip == (("Min value", "7"), ("Max value", "10"))


class TestLegendPlacement:
    def test_label_baseline(self, gradient_legend):
        _, _, legend = gradient_legend
        assert legend.label_y == pytest.approx(10 - 30 + 90 + 120 + 14.4)

    def test_required_height(self, gradient_legend):
        _, _, legend = gradient_legend
        assert legend.required_height == pytest.approx(legend.label_y + 60)

    def test_max_label_after_last_swatch(self, gradient_legend):
        _, geometry, legend = gradient_legend
        assert legend.max_label_x == pytest.approx(geometry.legend_element_width * 3 + geometry.x_offset)
        assert legend.max_label_x == pytest.approx(legend.entries[-1].rect.right)

    def test_to_dict(self, gradient_legend):
        _, _, legend = gradient_legend
        d = legend.to_dict()
        assert d["maxLabel"] == "10"
        assert len(d["entries"]) == 3
        assert d["entries"][0]["tooltip"] == [["Min value", "1"], ["Max value", "4"]]


class TestDegenerateLegend:
    def test_all_equal_values(self, abc_chart, default_settings, viewport, metrics):
        scale = ColorScaleBuilder.build(default_settings, (5.0, 5.0))
        geometry = GridLayoutEngine().compute(abc_chart, default_settings, viewport, metrics, bucket_count=5)
        legend = LegendBuilder.build(scale, 5.0, 5.0, geometry, abc_chart.y_formatter)
        assert len(legend.entries) == 5
        assert {e.label for e in legend.entries} == {"5"}
        assert legend.max_label == "5"
