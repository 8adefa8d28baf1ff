"""
Tests for quantity conversion
"""

import pytest

from hpa_metrics.core.quantity import INT64_MAX, as_int64, milli_value


class TestAsInt64:
    """Lossless integer conversion"""

    @pytest.mark.parametrize("quantity, expected", [
        ("10", 10),
        (42, 42),
        ("1k", 1000),
        ("1Gi", 1024 ** 3),
        ("2000m", 2),
    ])
    def test_integral_quantities(self, quantity, expected):
        assert as_int64(quantity) == expected

    @pytest.mark.parametrize("quantity", ["500m", "1.5", "100Ei"])
    def test_unrepresentable_quantities(self, quantity):
        assert as_int64(quantity) is None

    def test_int64_upper_bound(self):
        assert as_int64(str(INT64_MAX)) == INT64_MAX
        assert as_int64(str(INT64_MAX + 1)) is None

    def test_absent_and_malformed(self):
        assert as_int64(None) is None
        assert as_int64("lots") is None


class TestMilliValue:
    """Milli-unit conversion used for CPU"""

    def test_milli_units(self):
        assert milli_value("1500m") == 1500
        assert milli_value("2") == 2000
        assert milli_value("0.25") == 250

    def test_rounds_up(self):
        assert milli_value("1.0001") == 1001

    def test_absent(self):
        assert milli_value(None) is None
