"""
Unit tests for simulator/roi.py
"""

from datetime import datetime, timedelta

import pytest
from simulator.roi import RISK_ADJUSTMENT_FACTOR, calculate_roi_projection


NOW = datetime(2025, 1, 15)


class TestROIProjection:
    """Tests for calculate_roi_projection."""

    def test_savings_only(self):
        roi = calculate_roi_projection(1000, 1200, 0, now=NOW)

        assert roi.total_investment == 1000
        assert roi.savings == 200
        assert roi.projected_value == 1200
        assert roi.projected_roi == pytest.approx(20.0)
        assert roi.monthly_roi == pytest.approx(20.0 / 12)
        assert roi.risk_adjusted_roi == pytest.approx(17.0)
        assert roi.break_even_date is None

    def test_points_and_comps_count_toward_value(self):
        roi = calculate_roi_projection(2000, 2500, 100, comp_value=300, now=NOW)

        # 100 points at $5 each
        assert roi.points_value == 500
        assert roi.comp_value == 300
        assert roi.projected_value == 2500 + 500 + 300
        assert roi.projected_roi == pytest.approx((500 + 500 + 300) / 2000 * 100)

    def test_all_zero_inputs(self):
        roi = calculate_roi_projection(0, 0, 0, now=NOW)

        assert roi.projected_roi == 0
        assert roi.break_even_date is None

    def test_zero_spend_is_zero_roi(self):
        roi = calculate_roi_projection(0, 1000, 50, now=NOW)

        assert roi.projected_roi == 0
        assert roi.monthly_roi == 0
        assert roi.risk_adjusted_roi == 0
        assert roi.break_even_date is None

    def test_savings_never_negative(self):
        roi = calculate_roi_projection(3000, 1000, 0, now=NOW)
        assert roi.savings == 0

    def test_break_even_when_overpaying(self):
        roi = calculate_roi_projection(2000, 1500, 100, now=NOW)

        # ROI 25% over 12 months recovers ~41.67/month against a 500 gap: 12 months
        assert roi.projected_roi == pytest.approx(25.0)
        assert roi.break_even_date is not None
        assert abs(roi.break_even_date - (NOW + timedelta(days=360))) < timedelta(seconds=1)

    def test_no_break_even_without_recovery(self):
        roi = calculate_roi_projection(2000, 1500, 0, now=NOW)

        assert roi.projected_roi == 0
        assert roi.break_even_date is None

    def test_horizon_floor_of_one_month(self):
        roi = calculate_roi_projection(1000, 1200, 0, time_horizon_months=0, now=NOW)
        assert roi.monthly_roi == roi.projected_roi

    def test_risk_adjustment_is_flat(self):
        for spend, retail, points in [(1000, 1500, 10), (500, 400, 300), (2500, 2500, 0)]:
            roi = calculate_roi_projection(spend, retail, points, now=NOW)
            assert roi.risk_adjusted_roi == pytest.approx(roi.projected_roi * RISK_ADJUSTMENT_FACTOR)
