import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="STAFFING_", extra="ignore")

    db_url: str = "sqlite:///staffing.db"

    bill_number_prefix: str = "BILL-"
    bill_number_width: int = 4
    default_due_days: int = 15  # days after creation when no due date is given

    report_top_clients: int = 5
    report_top_providers: int = 5

    currency_symbol: str = "$"

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
