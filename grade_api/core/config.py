from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+psycopg2://localhost:5432/grade_api"
    ENV: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: int = 30

    LOG_LEVEL: str = "INFO"
    EXPOSE_ERROR_DETAILS: bool = True  # Include driver messages in 500 responses
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENV.casefold() == "production"


settings = Settings()
