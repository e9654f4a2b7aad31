# app/config.py
from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    openai_api_key: str | None = Field(None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(None, validation_alias="OPENAI_BASE_URL")
    llm_model: str = Field("gpt-4", validation_alias="LLM_MODEL")

    clinic_template: Literal["screening", "onboarding"] = Field(
        "screening", validation_alias="CLINIC_TEMPLATE"
    )
    clinic_name: str = Field("Strong Medicine", validation_alias="CLINIC_NAME")

    # How many past messages are sent to the model as context
    chat_history_window: int = Field(10, validation_alias="CHAT_HISTORY_WINDOW")
    report_history_window: int = Field(20, validation_alias="REPORT_HISTORY_WINDOW")

    # When true, history/lifestyle need extracted data to advance, like
    # demographics/symptoms do.
    strict_stage_advancement: bool = Field(
        False, validation_alias="STRICT_STAGE_ADVANCEMENT"
    )

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    cors_origins: List[str] = Field(["*"], validation_alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
