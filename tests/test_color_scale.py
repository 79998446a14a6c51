"""Tests for ColorScaleBuilder, BucketColorScale and QuantileScale."""

import math

import numpy as np
import pytest

from table_heatmap.core.color_scale import (
    BucketColorScale,
    ColorScaleBuilder,
    QuantileScale,
    available_bucket_range,
    normalize_settings,
)
from table_heatmap.core.palettes import COLORBREWER, palette_names
from table_heatmap.core.settings import GeneralSettings, HeatmapSettings


class TestPalettes:
    def test_every_palette_has_default_bucket_count(self):
        for name in palette_names():
            assert 5 in COLORBREWER[name], name

    def test_variant_lengths(self):
        for name, variants in COLORBREWER.items():
            for n, colors in variants.items():
                assert len(colors) == n, (name, n)

    def test_available_range(self):
        assert available_bucket_range("Reds") == (3, 9)
        assert available_bucket_range("RdBu") == (3, 11)
        assert available_bucket_range("Set3") == (3, 12)

    def test_unknown_palette_range(self):
        assert available_bucket_range("Nope") == available_bucket_range("Reds")


class TestBucketColors:
    def test_palette_mode(self):
        colors = ColorScaleBuilder.bucket_colors(GeneralSettings(colorbrewer="Blues", buckets=4))
        assert colors == COLORBREWER["Blues"][4]

    def test_palette_fallback_same_count(self):
        colors = ColorScaleBuilder._palette_colors("Nope", 4)
        assert colors == COLORBREWER["Reds"][4]

    def test_palette_fallback_nearest_count(self):
        colors = ColorScaleBuilder._palette_colors("Nope", 12)
        assert colors == COLORBREWER["Reds"][9]

    def test_missing_count_falls_back_to_default(self):
        # Set2 defines up to 8
        colors = ColorScaleBuilder._palette_colors("Set2", 9)
        assert colors == COLORBREWER["Reds"][9]

    def test_gradient_mode(self):
        general = GeneralSettings(
            enable_colorbrewer=False, buckets=3,
            gradient_start="#ff0000", gradient_end="#0000ff",
        )
        assert ColorScaleBuilder.bucket_colors(general) == ["#ff0000", "#aa0055", "#5500aa"]

    def test_gradient_starts_at_start_never_reaches_end(self):
        colors = ColorScaleBuilder._gradient_colors("#ffffff", "#000000", 4)
        assert len(colors) == 4
        assert colors[0] == "#ffffff"
        assert "#000000" not in colors

    def test_gradient_single_bucket(self):
        assert ColorScaleBuilder._gradient_colors("#ffffff", "#ff0000", 1) == ["#ffffff"]

    @pytest.mark.parametrize("buckets", [1, 5, 18])
    def test_count_matches_buckets(self, buckets):
        general = GeneralSettings(enable_colorbrewer=False, buckets=buckets)
        assert len(ColorScaleBuilder.bucket_colors(general)) == buckets


class TestQuantileScale:
    def test_thresholds(self):
        q = QuantileScale([0, 100], ["a", "b", "c", "d", "e"])
        np.testing.assert_allclose(q.quantiles(), [20, 40, 60, 80])

    def test_boundary_goes_to_lower_bin(self):
        q = QuantileScale([0, 10], ["lo", "hi"])
        assert q(5) == "lo"
        assert q(5.0001) == "hi"

    def test_outside_domain(self):
        q = QuantileScale([0, 10], ["lo", "hi"])
        assert q(-100) == "lo"
        assert q(100) == "hi"

    def test_nan(self):
        q = QuantileScale([0, 10], ["lo", "hi"])
        assert q(math.nan) is None
        assert q.index_of(math.nan) is None

    def test_vectorized_indices(self):
        q = QuantileScale([0, 10], ["lo", "hi"])
        np.testing.assert_array_equal(q.indices([1, np.nan, 9]), [0, -1, 1])

    def test_single_bin(self):
        q = QuantileScale([0, 10], ["only"])
        assert len(q.quantiles()) == 0
        assert q(7) == "only"

    def test_empty_range(self):
        with pytest.raises(ValueError, match="non-empty"):
            QuantileScale([0, 1], [])


class TestBucketColorScale:
    def test_gradient_scenario(self, gradient_settings):
        scale = ColorScaleBuilder.build(gradient_settings, (1.0, 10.0))
        assert scale.bucket_count == 3
        assert scale.quantiles() == pytest.approx([4.0, 7.0])
        assert scale.bucket_index(1) == 0
        assert scale.bucket_index(5) == 1
        assert scale.bucket_index(10) == 2
        assert scale(10) == "#5500aa"

    def test_monotone(self, default_settings):
        scale = ColorScaleBuilder.build(default_settings, (0.0, 50.0))
        indices = [scale.bucket_index(v) for v in np.linspace(0, 50, 101)]
        assert indices == sorted(indices)
        assert indices[0] == 0
        assert indices[-1] == scale.bucket_count - 1

    def test_degenerate_domain(self, default_settings):
        scale = ColorScaleBuilder.build(default_settings, (3.0, 3.0))
        assert scale.is_degenerate
        assert scale.bucket_index(3.0) == 0
        assert scale.to_color(3.0) == scale.colors[0]

    def test_nan_has_no_color(self, default_settings):
        scale = ColorScaleBuilder.build(default_settings, (0.0, 1.0))
        assert scale.to_color(math.nan) is None

    def test_range_kept(self):
        scale = BucketColorScale(["#000000", "#ffffff"], vmin=-2, vmax=8)
        assert (scale.vmin, scale.vmax) == (-2.0, 8.0)
        assert scale.quantiles() == [3.0]

    def test_clamped_settings_drive_colors(self):
        settings = normalize_settings(HeatmapSettings.from_dict({"general": {"buckets": 40}}))
        scale = ColorScaleBuilder.build(settings, (0.0, 1.0))
        assert scale.colors == tuple(COLORBREWER["Reds"][9])
