import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    # --- Default KPI weights (must add up to 100) ---
    KPI_ACCOUNTS_WEIGHT: float = float(os.getenv("KPI_ACCOUNTS_WEIGHT", "40"))
    KPI_VAT_WEIGHT: float = float(os.getenv("KPI_VAT_WEIGHT", "30"))
    KPI_SA_WEIGHT: float = float(os.getenv("KPI_SA_WEIGHT", "30"))

    # Monthly salary / divisor = bonus pool (4 -> quarterly)
    BONUS_POOL_DIVISOR: float = float(os.getenv("BONUS_POOL_DIVISOR", "4"))

    # --- SA season (April -> January) ---
    # Closing month of the season, 1-12 (1 = January)
    SA_SEASON_END_MONTH: int = int(os.getenv("SA_SEASON_END_MONTH", "1"))

    CURRENCY_CODE: str = os.getenv("CURRENCY_CODE", "LKR")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "system_errors.log")

settings = Settings()
