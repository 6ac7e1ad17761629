from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/portal"
    db_echo: bool = False
    log_level: str = "INFO"

    # Health label bands (inclusive lower bounds, evaluated top-down)
    health_healthy_min: int = 80    # >= 80 → Healthy
    health_attention_min: int = 60  # >= 60 → Needs Attention
    health_at_risk_min: int = 40    # >= 40 → At Risk, below → Critical

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        if not isinstance(value, str):
            return value

        normalized = value.strip().strip('"').strip("'")
        if normalized.startswith("postgres://"):
            normalized = "postgresql+asyncpg://" + normalized[len("postgres://") :]
        elif normalized.startswith("postgresql://"):
            normalized = "postgresql+asyncpg://" + normalized[len("postgresql://") :]

        return normalized

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_health_bands(self) -> "Settings":
        if not (
            100 >= self.health_healthy_min
            > self.health_attention_min
            > self.health_at_risk_min
            >= 0
        ):
            raise ValueError(
                "health bands must be descending within 0-100: "
                f"{self.health_healthy_min}/{self.health_attention_min}/{self.health_at_risk_min}"
            )
        return self

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
