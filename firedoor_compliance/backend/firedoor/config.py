from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Reproducibility ----
    rules_version: str = "2026-10-17.v1"

    # ---- Scheduling ----
    auto_schedule_window_days: int = 30
    reminder_urgent_days: int = 7

    def model_post_init(self, __context) -> None:
        if int(self.auto_schedule_window_days) < 0:
            raise ValueError("auto_schedule_window_days must be >= 0")
        if int(self.reminder_urgent_days) < 0:
            raise ValueError("reminder_urgent_days must be >= 0")

        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        # Hard fail: wildcard CORS in prod
        if is_prod:
            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
