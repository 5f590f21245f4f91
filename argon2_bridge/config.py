from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # each in-flight hash commits `memory` KiB; the pool never exceeds the budget
    HASH_WORKERS: int = 4
    HASH_MEMORY_BUDGET_KIB: int = 256 * 1024

    REDIS_URL: str = "redis://localhost:6379/0"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
