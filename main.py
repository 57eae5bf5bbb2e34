# main.py
"""
Sample run of the engine with the configured weights.

    python main.py
"""

import logging
from datetime import date

from core.config import settings
from core.config_service import ConfigService
from core.logging_config import setup_logging
from modules.bonus import EmployeeData, KpiScores, calculate_employee_bonus, determine_fiscal_period, bonus_rating
from modules.sa_tracker import TeamCapacity, default_sa_tracker, distribute, forecast, record_jobs_completed

logger = logging.getLogger("KpiEngine")


def run_bonus_sample():
    weights = ConfigService.get_kpi_weights()
    warning = ConfigService.validate_weights(weights)
    if warning:
        logger.warning(warning)

    employee = EmployeeData(
        id="1",
        name="Sample Employee",
        monthly_salary=150000,
        kpi_scores=KpiScores(accounts=[95, 88, 92], vat=[92, 94, 90], sa=[88, 90, 85])
    )
    result, errors = calculate_employee_bonus(employee, weights, fiscal_period=determine_fiscal_period())
    if errors:
        for error in errors:
            logger.error(error)
        return

    logger.info(
        f"{employee.name}: score {result.total_score:.1f}/100 ({bonus_rating(result.total_score)}), "
        f"bonus {settings.CURRENCY_CODE} {result.bonus_amount:,.2f} of {result.quarterly_pool:,.2f}"
    )


def run_sa_sample(today: date):
    tracker = default_sa_tracker()
    for i, jobs in enumerate([30, 30, 35, 85, 60, 80]):
        tracker[i] = record_jobs_completed(tracker[i], jobs)

    teams = [TeamCapacity(team_name="Team A", capacity_weight=1.5), TeamCapacity(team_name="Team B")]
    logger.info(f"Team split of {tracker[0].total_jobs} jobs: {distribute(tracker[0].total_jobs, teams)}")

    outlook = forecast(tracker, current_date=today, season_end_month=settings.SA_SEASON_END_MONTH)
    logger.info(
        f"SA forecast: {outlook.forecasted_completion}% by season end "
        f"({'on track' if outlook.is_on_track else 'behind'}), "
        f"needs {outlook.required_monthly_rate} jobs/month"
    )


if __name__ == "__main__":
    setup_logging()
    run_bonus_sample()
    run_sa_sample(date.today())
