from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "BrewMaster API"
    api_prefix: str = "/api/v1"
    database_url: str = "sqlite:///./brewmaster.db"
    auto_create_tables: bool = False
    log_level: str = "INFO"

    default_brewer: str = "BrewMaster AI"

    ai_provider: str = "rules"
    ai_llm_base_url: str | None = None
    ai_llm_api_key: str | None = None
    ai_llm_model: str | None = None
    ai_llm_timeout_seconds: int = 20
    ai_rate_limit_requests: int = 10
    ai_rate_limit_window_seconds: int = 3600

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
