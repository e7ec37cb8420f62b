from __future__ import annotations

from typing import Optional

from pydantic import AnyUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    # Generation keys are checked per request so the app can boot without them
    GOOGLE_GENAI_API_KEY: Optional[SecretStr] = None
    GOOGLE_AI_API_KEY: Optional[SecretStr] = None
    GENAI_TEXT_MODEL: str = "gemini-1.5-flash-latest"
    GENAI_IMAGE_MODEL: str = "imagen-3.0-generate-002"
    GOOGLE_AI_MODEL: str = "gemini-1.5-flash-latest"

    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[SecretStr] = None
    AI_ROLES_TABLE: str = "ai_roles"

    APP_ENV: str = "local"
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


settings = Settings()
