"""Tests for the monthly cost forecast."""

from datetime import date

import pytest

from cloud_cost_dashboard.analysis.aggregator import CostPoint
from cloud_cost_dashboard.analysis.forecast import generate_forecast, trailing_average


def create_months(start_year: int, start_month: int, costs: list[float]) -> list[CostPoint]:
    """Helper to create consecutive monthly points."""
    points = []
    year, month = start_year, start_month
    for cost in costs:
        start = date(year, month, 1)
        points.append(CostPoint(period=start.strftime("%Y-%m"), period_start=start, cost=cost))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return points


class TestTrailingAverage:
    """Tests for the trailing average."""

    def test_uses_last_three_months(self):
        """Test that only the most recent months count."""
        monthly = create_months(2024, 1, [1000.0, 100.0, 120.0, 140.0])
        assert trailing_average(monthly) == pytest.approx(120.0)

    def test_short_history(self):
        """Test that fewer months than the lookback are all used."""
        assert trailing_average(create_months(2024, 1, [50.0, 70.0])) == pytest.approx(60.0)

    def test_empty_history(self):
        """Test that no history gives None."""
        assert trailing_average([]) is None

    def test_invalid_lookback(self):
        """Test that lookback below 1 raises."""
        with pytest.raises(ValueError):
            trailing_average(create_months(2024, 1, [1.0]), lookback=0)


class TestGenerateForecast:
    """Tests for forecast generation."""

    def test_flat_projection(self):
        """Test that every projected month equals the trailing average."""
        monthly = create_months(2024, 1, [100.0, 120.0, 140.0])
        points = generate_forecast(monthly, horizon=2)

        assert [p.period for p in points] == ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05"]
        assert [p.is_forecast for p in points] == [False, False, False, True, True]
        assert points[3].cost == pytest.approx(120.0)
        assert points[4].cost == pytest.approx(120.0)

    def test_history_is_preserved(self):
        """Test that historical points keep their actual cost."""
        monthly = create_months(2024, 1, [100.0, 120.0, 140.0])
        points = generate_forecast(monthly, horizon=1)
        assert [p.cost for p in points[:3]] == [100.0, 120.0, 140.0]

    def test_year_rollover(self):
        """Test that December is followed by January of the next year."""
        points = generate_forecast(create_months(2023, 11, [10.0, 20.0]), horizon=2)
        assert [p.period for p in points[2:]] == ["2024-01", "2024-02"]
        assert points[2].cost == pytest.approx(15.0)

    def test_zero_horizon(self):
        """Test that a zero horizon returns the history only."""
        monthly = create_months(2024, 1, [10.0])
        points = generate_forecast(monthly, horizon=0)
        assert len(points) == 1
        assert not points[0].is_forecast

    def test_custom_lookback(self):
        """Test averaging over a longer window."""
        monthly = create_months(2024, 1, [10.0, 20.0, 30.0, 40.0, 50.0, 60.0])
        points = generate_forecast(monthly, horizon=1, lookback=6)
        assert points[-1].cost == pytest.approx(35.0)

    def test_empty_history(self):
        """Test that no history yields no forecast."""
        assert generate_forecast([], horizon=3) == []

    def test_negative_horizon(self):
        """Test that a negative horizon raises."""
        with pytest.raises(ValueError):
            generate_forecast(create_months(2024, 1, [10.0]), horizon=-1)

    def test_to_dict(self):
        """Test serialization of a forecast point."""
        points = generate_forecast(create_months(2024, 1, [10.0]), horizon=1)
        assert points[-1].to_dict() == {"date": "2024-02", "cost": 10.0, "isForecast": True}
