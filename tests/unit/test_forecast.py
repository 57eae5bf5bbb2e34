from datetime import date

import pytest

from modules.sa_tracker.forecast import forecast, forecast_team, months_until
from modules.sa_tracker.schemas import MonthlyThroughput


class TestMonthsUntil:

    @pytest.mark.parametrize("current, end, expected", [
        (10, 1, 3),
        (4, 1, 9),
        (12, 1, 1),
        (2, 1, 11),
        (1, 1, 12),
        (6, 6, 12),
    ])
    def test_wraps_over_year_end(self, current, end, expected):
        assert months_until(current, end) == expected


class TestForecast:
    """Year-end projection from average monthly throughput."""

    def test_behind_schedule(self, sa_targets):
        result = forecast(sa_targets, current_date=date(2024, 10, 15))

        assert result.completed_jobs == 320
        assert result.total_jobs == 500
        assert result.months_with_data == 6
        assert result.avg_monthly_rate == pytest.approx(320 / 6)
        assert result.months_remaining == 3
        assert result.projected_total_jobs == pytest.approx(480)
        assert result.forecasted_completion == 96.0
        assert result.is_on_track is False
        assert result.required_monthly_rate == 60
        assert result.projected_shortfall == 20

    def test_projection_months(self, sa_targets):
        result = forecast(sa_targets, current_date=date(2024, 10, 15))

        assert [p.month for p in result.projection] == ["Nov 2024", "Dec 2024", "Jan 2025"]
        assert [p.projected_jobs for p in result.projection] == [373, 427, 480]
        assert [p.projected_completion for p in result.projection] == [74.7, 85.3, 96.0]

    def test_capped_at_total(self, sa_targets):
        result = forecast(sa_targets, current_date=date(2024, 7, 1))

        assert result.months_remaining == 6
        assert result.forecasted_completion == 100.0
        assert result.is_on_track is True
        assert result.projected_shortfall == 0
        assert result.required_monthly_rate == 30
        assert max(p.projected_jobs for p in result.projection) == 500
        assert result.projection[-1].projected_completion == 100.0

    def test_season_end_month_gives_full_cycle(self, sa_targets):
        assert forecast(sa_targets, current_date=date(2025, 1, 20)).months_remaining == 12

    def test_on_track_boundary(self):
        on_track = forecast([MonthlyThroughput(jobs_completed=330, total_jobs=1000)], current_date=date(2024, 11, 1))
        assert on_track.forecasted_completion == 99.0
        assert on_track.is_on_track is True

        behind = forecast([MonthlyThroughput(jobs_completed=329, total_jobs=1000)], current_date=date(2024, 11, 1))
        assert behind.forecasted_completion == 98.7
        assert behind.is_on_track is False

    def test_more_months_never_lowers_forecast(self, sa_targets):
        # December -> 1 month left ... February -> 11 months left
        dates = [date(2024, 12, 1), date(2024, 11, 1), date(2024, 10, 1), date(2024, 8, 1), date(2024, 5, 1), date(2025, 2, 1)]
        results = [forecast(sa_targets, current_date=d) for d in dates]

        remaining = [r.months_remaining for r in results]
        assert remaining == sorted(remaining)
        completions = [r.forecasted_completion for r in results]
        assert completions == sorted(completions)
        for r in results:
            assert r.is_on_track == (r.forecasted_completion >= 99)

    def test_no_data(self):
        history = [MonthlyThroughput(jobs_completed=0, total_jobs=500) for _ in range(5)]
        result = forecast(history, current_date=date(2024, 4, 1))

        assert result.forecasted_completion == 0
        assert result.is_on_track is False
        assert result.required_monthly_rate == 100
        assert result.projected_shortfall == 500
        assert result.projection == []

    def test_explicit_total_overrides_history(self, sa_targets):
        result = forecast(sa_targets, current_date=date(2024, 10, 15), total_jobs=400)
        assert result.total_jobs == 400
        assert result.forecasted_completion == 100.0

    def test_accepts_mappings(self):
        result = forecast([{"jobs_completed": 50, "total_jobs": 100}], current_date=date(2024, 12, 1))
        assert result.forecasted_completion == 100.0
        assert result.is_on_track is True

    @pytest.mark.parametrize("history, total", [
        ([MonthlyThroughput(jobs_completed=10, total_jobs=0)], None),
        ([], None),
        ([MonthlyThroughput(jobs_completed=10, total_jobs=100)], -5),
    ])
    def test_invalid_total(self, history, total):
        with pytest.raises(ValueError, match="total_jobs"):
            forecast(history, current_date=date(2024, 10, 1), total_jobs=total)


class TestForecastTeam:

    def test_team_slice(self, sa_targets_with_teams):
        result = forecast_team(sa_targets_with_teams, "Team A", current_date=date(2024, 10, 15))

        assert result.team_name == "Team A"
        assert result.completed_jobs == 120
        assert result.total_jobs == 300
        assert result.forecasted_completion == 60.0
        assert result.required_monthly_rate == 60
        assert result.projected_shortfall == 120

    def test_same_algorithm_as_organization(self, sa_targets_with_teams):
        team = forecast_team(sa_targets_with_teams, "Team B", current_date=date(2024, 10, 15))
        rows = [MonthlyThroughput(jobs_completed=10 if i < 6 else 0, total_jobs=200) for i in range(10)]
        direct = forecast(rows, current_date=date(2024, 10, 15), team_name="Team B")
        assert team == direct

    def test_unknown_team(self, sa_targets_with_teams):
        with pytest.raises(ValueError, match="Team Z"):
            forecast_team(sa_targets_with_teams, "Team Z", current_date=date(2024, 10, 15))
