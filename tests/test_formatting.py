"""Tests for ValueFormatter."""

import math

import numpy as np
import pandas as pd
import pytest

from table_heatmap.core.formatting import (
    BLANK_TEXT,
    ValueFormatter,
    is_blank,
    sample_decimals,
)


class TestSampleDecimals:
    def test_integer_sample(self):
        assert sample_decimals(5) == 0
        assert sample_decimals(5.0) == 0

    def test_fractional_sample(self):
        assert sample_decimals(2.75) == 2

    def test_capped(self):
        assert sample_decimals(1.123456789) == 4

    def test_non_number(self):
        assert sample_decimals("abc") == 0
        assert sample_decimals(None) == 0


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, float("nan"), np.nan, pd.NaT])
    def test_blank(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", [0, 0.0, "", "x"])
    def test_not_blank(self, value):
        assert not is_blank(value)


class TestNumericPatterns:
    def test_thousands_grouping(self):
        f = ValueFormatter.create("#,0", 1)
        assert f.format(1234.4) == "1,234"

    def test_fixed_decimals(self):
        f = ValueFormatter.create("0.00", 1.0)
        assert f.format(3.14159) == "3.14"
        assert f.format(2) == "2.00"

    def test_optional_decimals_and_prefix(self):
        f = ValueFormatter.create("$#,0.##", 1.0)
        assert f.format(1234.5) == "$1,234.5"
        assert f.format(1234) == "$1,234"

    def test_percent(self):
        f = ValueFormatter.create("0.0 %", 0.5)
        assert f.format(0.125) == "12.5 %"

    def test_negative_section(self):
        f = ValueFormatter.create("0;(0)", 1)
        assert f.format(-12) == "(12)"
        assert f.format(12) == "12"

    def test_zero_section(self):
        f = ValueFormatter.create("0.0;-0.0;zero 0", 1)
        assert f.format(0) == "zero 0"

    def test_thousands_scaling(self):
        f = ValueFormatter.create("#,0,", 1)
        assert f.format(12345) == "12"

    def test_general_format_name(self):
        f = ValueFormatter.create("General", 2.5)
        assert f.kind == "number"
        assert f.format(3.14) == "3.1"


class TestSampleInference:
    def test_integer_sample_rounds(self):
        f = ValueFormatter.create(None, 5)
        assert f.format(10) == "10"
        assert f.format(7.8) == "8"

    def test_float_sample_keeps_its_precision(self):
        f = ValueFormatter.create(None, 2.75)
        assert f.format(3.14159) == "3.14"

    def test_zero_is_not_negative_zero(self):
        f = ValueFormatter.create(None, 1)
        assert f.format(-0.2) == "0"

    def test_text_sample(self):
        f = ValueFormatter.create(None, "North")
        assert f.kind == "text"
        assert f.format("South") == "South"

    def test_null_sample_formats_by_value(self):
        f = ValueFormatter.create(None, None)
        assert f.kind == "general"
        assert f.format("x") == "x"
        assert f.format(1.5) == "1.5"

    def test_blank_values(self):
        f = ValueFormatter.create("0.00", 1.0)
        assert f.format(None) == BLANK_TEXT
        assert f.format(math.nan) == BLANK_TEXT

    def test_callable(self):
        f = ValueFormatter.create("0.0", 1.0)
        assert f(2) == "2.0"


class TestDateFormats:
    def test_custom_pattern(self):
        sample = pd.Timestamp("2024-01-31")
        f = ValueFormatter.create("dd/MM/yyyy", sample)
        assert f.kind == "date"
        assert f.format(sample) == "31/01/2024"

    def test_month_names(self):
        f = ValueFormatter.create("MMM yyyy", pd.Timestamp("2024-03-05"))
        assert f.format(pd.Timestamp("2024-03-05")) == "Mar 2024"

    def test_default_date(self):
        f = ValueFormatter.create(None, pd.Timestamp("2024-03-05"))
        assert f.format(pd.Timestamp("2024-03-05")) == "2024-03-05"

    def test_default_datetime(self):
        f = ValueFormatter.create(None, pd.Timestamp("2024-03-05 14:30"))
        assert f.format(pd.Timestamp("2024-03-05 14:30")) == "2024-03-05 14:30:00"
