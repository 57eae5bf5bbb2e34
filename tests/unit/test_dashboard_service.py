import pytest
from pydantic import ValidationError

from modules.dashboard.schemas import MonthlyKpiRecord
from modules.dashboard.service import (
    fixed_points_for,
    sa_points_for,
    seasonal_factor,
    calculate_monthly_points,
    calculate_quarterly_bonus,
    check_badges,
    build_leaderboard,
    team_performance
)


def record(month, accounts, vat, sa, staff_id="s1", team_name=None):
    return MonthlyKpiRecord(staff_id=staff_id, month=month, accounts=accounts, vat=vat, sa=sa, team_name=team_name)


class TestFixedPoints:
    """Fixed 40/30/30 dashboard tables."""

    @pytest.mark.parametrize("percentage, expected", [(95, 30), (85, 25.5), (75, 19.5), (65, 10.5), (50, 0)])
    def test_sa_points_for(self, percentage, expected):
        assert sa_points_for(percentage) == expected

    def test_sa_points_independent_of_weights(self):
        """SA table stays on the 30-point scale."""
        assert sa_points_for(90) == 30
        assert sa_points_for(59.999) == 0

    def test_accounts_and_vat(self):
        assert fixed_points_for(85, "accounts") == pytest.approx(34)
        assert fixed_points_for(75, "vat") == pytest.approx(19.5)

    def test_sa_not_accepted(self):
        with pytest.raises(ValueError, match="sa_points_for"):
            fixed_points_for(90, "sa")

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            fixed_points_for(90, "payroll")

    def test_seasonal_factors(self):
        assert seasonal_factor(1) == 1.2
        assert seasonal_factor(8) == 0.85
        assert seasonal_factor(12) == 1.1


class TestMonthlyKpiRecord:

    def test_month_normalized(self):
        assert record("2024-3", 0, 0, 0).month == "2024-03"

    @pytest.mark.parametrize("month", ["2024/03", "24-03", "2024-13", "March"])
    def test_bad_month(self, month):
        with pytest.raises(ValidationError):
            record(month, 0, 0, 0)

    def test_percentage_range(self):
        with pytest.raises(ValidationError):
            record("2024-03", 101, 0, 0)


class TestCalculateMonthlyPoints:
    """Seasonal model of the dashboard path."""

    def test_standard_month_capped_at_100(self):
        result = calculate_monthly_points(record("2024-01", 95, 92, 91))
        assert result.raw_total == 100
        assert result.seasonal_factor == 1.2
        assert result.adjusted_total == 100
        assert result.adjustment == "standard"
        assert result.bonus_amount == 37500

    def test_standard_month(self):
        result = calculate_monthly_points(record("2024-10", 85, 75, 85))
        assert result.raw_total == pytest.approx(79)
        assert result.adjusted_total == pytest.approx(79)

    def test_missing_sa_outside_season_is_rescaled(self):
        result = calculate_monthly_points(record("2024-08", 95, 85, 0))
        assert result.adjustment == "non_sa_rescale"
        assert result.adjusted_total == pytest.approx(65.5 * 100 / 70 * 0.85)
        assert result.bonus_amount == 29826

    def test_missing_sa_in_season_is_penalized(self):
        result = calculate_monthly_points(record("2024-11", 95, 95, 0))
        assert result.adjustment == "sa_missing_penalty"
        assert result.adjusted_total == pytest.approx(70 * 0.8 * 1.05)

    def test_empty_month(self):
        result = calculate_monthly_points(record("2024-10", 0, 0, 0))
        assert result.adjustment == "standard"
        assert result.adjusted_total == 0
        assert result.bonus_amount == 0

    def test_salary_and_divisor(self):
        result = calculate_monthly_points(record("2024-10", 95, 95, 95), monthly_salary=120000, bonus_pool_divisor=12)
        assert result.bonus_amount == 10000

    def test_invalid_divisor(self):
        with pytest.raises(ValueError):
            calculate_monthly_points(record("2024-10", 95, 95, 95), bonus_pool_divisor=0)


class TestQuarterlyBonus:

    def test_average_of_adjusted_points(self, monthly_records):
        # Jan 100 (capped), Feb 100, Mar 95
        assert calculate_quarterly_bonus(monthly_records, "s1", 2024, 1) == 36875

    def test_no_records(self, monthly_records):
        assert calculate_quarterly_bonus(monthly_records, "s1", 2024, 2) == 0
        assert calculate_quarterly_bonus(monthly_records, "unknown", 2024, 1) == 0

    def test_bad_quarter(self, monthly_records):
        with pytest.raises(ValueError, match="quarter"):
            calculate_quarterly_bonus(monthly_records, "s1", 2024, 5)


class TestBadges:

    def test_all_badges(self, monthly_records):
        names = [b.name for b in check_badges(monthly_records, "s1")]
        assert names == ["Accounts Master", "VAT Wizard", "SA Champion", "Perfect Quarter"]

    def test_no_streak(self, monthly_records):
        assert check_badges(monthly_records, "s2") == []

    def test_needs_three_months(self):
        records = [record("2024-01", 95, 95, 95), record("2024-02", 95, 95, 95)]
        assert check_badges(records, "s1") == []

    def test_only_latest_months_count(self):
        records = [
            record("2023-12", 10, 10, 10),
            record("2024-01", 95, 50, 50),
            record("2024-02", 95, 50, 50),
            record("2024-03", 95, 50, 50),
        ]
        assert [b.id for b in check_badges(records, "s1")] == ["1"]

    def test_streak_is_per_staff_member(self):
        records = [
            record("2024-01", 95, 95, 95, staff_id="s1"),
            record("2024-02", 95, 95, 95, staff_id="s2"),
            record("2024-03", 95, 95, 95, staff_id="s3"),
        ]
        assert check_badges(records, "s1") == []

    def test_staff_id_required(self, monthly_records):
        with pytest.raises(TypeError):
            check_badges(monthly_records)


class TestLeaderboard:

    def test_ranking_for_month(self, monthly_records):
        board = build_leaderboard(monthly_records, month="2024-01")
        assert [row["staff_id"] for row in board] == ["s1", "s2", "s3"]
        assert [row["rank"] for row in board] == [1, 2, 3]
        assert board[0]["total_points"] == pytest.approx(100)
        assert board[1]["total_points"] == pytest.approx(76.8)
        assert board[2]["total_points"] == pytest.approx(43.8)

    def test_all_months(self, monthly_records):
        board = build_leaderboard(monthly_records)
        assert board[0]["staff_id"] == "s1"
        assert board[0]["months"] == 3

    def test_empty(self, monthly_records):
        assert build_leaderboard(monthly_records, month="2030-01") == []
        assert build_leaderboard([]) == []

    def test_half_values_round_up(self):
        records = [record("2024-10", 92.0, 95, 95), record("2024-11", 92.5, 95, 95)]
        assert build_leaderboard(records)[0]["accounts"] == 92.3


class TestTeamPerformance:

    def test_team_averages(self, monthly_records):
        teams = team_performance(monthly_records, "2024-03")
        assert [t["team_name"] for t in teams] == ["North", "South"]

        north = teams[0]
        assert north["members"] == 2
        assert north["accounts"] == pytest.approx(92)
        assert north["sa"] == pytest.approx(46)
        assert north["total_points"] == pytest.approx(65.5 * 0.95)
        assert north["rating"] == "Needs Improvement"

    def test_half_values_round_up(self):
        records = [
            record("2024-10", 92.0, 95, 95, staff_id="a", team_name="East"),
            record("2024-10", 92.5, 95, 95, staff_id="b", team_name="East"),
        ]
        assert team_performance(records, "2024-10")[0]["accounts"] == 92.3

    def test_records_without_team_ignored(self):
        records = [record("2024-03", 95, 95, 95, team_name=None)]
        assert team_performance(records, "2024-03") == []
