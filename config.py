from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    secret_key: str
    password_pepper: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 12
    database_url: str = "postgresql+asyncpg://localhost/jobly"
    cors_origins: list[str] = []
    log_level: str = "INFO"

    @property
    def asyncpg_dsn(self) -> str:
        """SQLAlchemy URL -> asyncpg DSN"""
        return self.database_url.replace("postgresql+asyncpg://", "postgresql://", 1)


settings = Settings()
