import pytest

from core.schemas import KpiWeights
from modules.bonus.schemas import EmployeeData, KpiScores
from modules.dashboard.schemas import MonthlyKpiRecord
from modules.sa_tracker.schemas import TeamCapacity, TeamBreakdown
from modules.sa_tracker.service import default_sa_tracker


@pytest.fixture
def default_weights():
    """Standard 40/30/30 split with a quarterly pool (salary / 4)."""
    return KpiWeights(accounts_weight=40, vat_weight=30, sa_weight=30, bonus_pool_divisor=4)


@pytest.fixture
def sample_employee():
    """Employee with mixed tiers across the quarter."""
    return EmployeeData(
        id="emp-1",
        name="Test Employee",
        monthly_salary=150000,
        kpi_scores=KpiScores(accounts=[95, 88, 92], vat=[92, 94, 90], sa=[88, 90, 85])
    )


@pytest.fixture
def perfect_employee():
    return EmployeeData(
        id="emp-2",
        name="Perfect Employee",
        monthly_salary=100000,
        kpi_scores=KpiScores(accounts=[100, 100, 100], vat=[100, 100, 100], sa=[100, 100, 100])
    )


@pytest.fixture
def team_capacities():
    """Three teams; Team A works at 1.5x capacity."""
    return [
        TeamCapacity(team_name="Team A", capacity_weight=1.5),
        TeamCapacity(team_name="Team B", capacity_weight=1.0),
        TeamCapacity(team_name="Team C", capacity_weight=1.0),
    ]


@pytest.fixture
def sa_targets():
    """April-January season of 500 jobs, first six months recorded."""
    targets = default_sa_tracker(total_jobs=500)
    for i, jobs in enumerate([30, 30, 35, 85, 60, 80]):
        targets[i] = targets[i].model_copy(update={"jobs_completed": jobs})
    return targets


@pytest.fixture
def sa_targets_with_teams(sa_targets):
    """Same season with a two-team breakdown (300 / 200 target jobs)."""
    result = []
    for i, month in enumerate(sa_targets):
        jobs_a = 20 if i < 6 else 0
        jobs_b = 10 if i < 6 else 0
        result.append(month.model_copy(update={
            "team_breakdown": [
                TeamBreakdown(team_name="Team A", jobs_completed=jobs_a, target_jobs=300),
                TeamBreakdown(team_name="Team B", jobs_completed=jobs_b, target_jobs=200),
            ]
        }))
    return result


@pytest.fixture
def monthly_records():
    """Three staff over Q1 of 2024, two teams."""
    rows = [
        ("s1", "2024-01", 95, 92, 91, "North"),
        ("s1", "2024-02", 93, 90, 94, "North"),
        ("s1", "2024-03", 96, 95, 92, "North"),
        ("s2", "2024-01", 85, 75, 65, "North"),
        ("s2", "2024-02", 82, 78, 70, "North"),
        ("s2", "2024-03", 88, 81, 0, "North"),
        ("s3", "2024-01", 70, 60, 50, "South"),
        ("s3", "2024-02", 72, 65, 55, "South"),
        ("s3", "2024-03", 75, 68, 58, "South"),
    ]
    return [
        MonthlyKpiRecord(staff_id=s, month=m, accounts=a, vat=v, sa=sa, team_name=t)
        for s, m, a, v, sa, t in rows
    ]
