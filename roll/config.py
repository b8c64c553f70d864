from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ROLL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Rolls of more than this many dice are shown as a histogram, or as a
    # bare sum when the dice also have more than this many sides.
    detail_threshold: int = 20

    # Every die is still sampled individually, so the number of dice in a
    # whole expression is capped.
    max_times: int = 100_000

    log_level: str = "WARNING"


settings = Settings()
