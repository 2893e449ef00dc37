from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///fatigue.db")
    # Fatigue points recovered per whole elapsed day.
    decay_per_day: float = Field(default=18.0, ge=0)
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FATIGUE_",
        extra="ignore",
    )


settings = Settings()
