from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Tasty Bites API"
    environment: str = "local"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Load the sample menu into the store on startup
    seed_menu: bool = True

    rate_limit_enabled: bool = True
    write_rate_limit: str = "60/minute"

    sentry_dsn: str | None = None
    sentry_environment: str | None = None


settings = Settings()
