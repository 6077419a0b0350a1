from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Excel Medical Solutions"
    BUSINESS_TIMEZONE: str = "Europe/London"
    CURRENCY_SYMBOL: str = "£"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: str = "./data/records"
    SEED_DEMO_CATALOG: bool = True

    PERSISTENCE_URL: str | None = None
    PERSISTENCE_API_KEY: str | None = None
    PERSISTENCE_TIMEOUT_SECONDS: float = 10.0

    ADMIN_API_TOKEN: str | None = None
    STRICT_STATUS_TRANSITIONS: bool = False
    RELEASE_SPOTS_ON_CANCEL: bool = False

    WORKFLOW_LIMIT: int = 1000


settings = Settings()
