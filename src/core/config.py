import secrets
from typing import Any, List, Optional, Union

from pydantic import AnyHttpUrl, BaseModel, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FraudConfig(BaseModel):
    # words per minute
    max_reading_speed: int = Field(default=400, gt=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    ENVIRONMENT_NAME: str = "Development"

    @property
    def is_production(self):
        return self.ENVIRONMENT_NAME == "Production"

    API_V1_STR: str = "/api"
    SECRET_KEY: str = secrets.token_urlsafe(32)
    # 60 minutes * 24 hours * 7 days = 7 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    JWT_ALGORITHM: str = "HS256"
    # BACKEND_CORS_ORIGINS is a JSON-formatted list of origins
    # e.g: '["http://localhost:3000", "http://localhost:5173"]'
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    PROJECT_NAME: str = "Beta Reader API"
    VERSION: str = "1.0.0"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "beta_reader"
    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    # services roll back once the deadline passes; the HTTP layer waits the
    # extra grace period for that rollback before answering 504 itself
    REQUEST_TIMEOUT_SECONDS: float = Field(default=30, gt=0)
    REQUEST_TIMEOUT_GRACE_SECONDS: float = Field(default=5, ge=0)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    SEQ_SERVER_URL: Optional[str] = None
    SEQ_SERVER_API_KEY: Optional[str] = None

    # Anti-fraud
    FRAUD_MAX_READING_SPEED: int = Field(default=400, gt=0)

    # Business rules, values in cents
    PREMIUM_PRICE: int = 2990
    FREE_MIN_WITHDRAWAL: int = 5000
    PREMIUM_MIN_WITHDRAWAL: int = 1500

    @property
    def fraud_config(self) -> FraudConfig:
        return FraudConfig(max_reading_speed=self.FRAUD_MAX_READING_SPEED)

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: str | None, info: ValidationInfo) -> Any:
        if isinstance(v, str) and v:
            return v
        data = info.data
        return (
            f"postgresql+psycopg2://{data.get('POSTGRES_USER')}:{data.get('POSTGRES_PASSWORD')}"
            f"@{data.get('POSTGRES_SERVER')}/{data.get('POSTGRES_DB') or ''}"
        )


settings = Settings()
