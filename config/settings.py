from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import os
from pathlib import Path


class Settings(BaseSettings):
    """Application settings - reads from environment variables"""

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_key: str = ""
    db_schema: str = "public"

    # Data source: "supabase" or "demo" (in-memory seeded data)
    data_source: str = "supabase"

    # Geocoding
    geocoder_url: str = "https://nominatim.openstreetmap.org/search"
    geocoder_user_agent: str = "LeagueHub/1.0"
    geocoder_country_codes: str = "us"
    geocoder_timeout: float = 10.0

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Environment
    env: str = "development"

    @field_validator('data_source', mode='before')
    @classmethod
    def normalize_data_source(cls, v):
        value = str(v or "supabase").strip().lower()
        if value not in ("supabase", "demo"):
            raise ValueError(f"Unknown data source: {v}")
        return value

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # SUPABASE_URL == supabase_url
    )

    @property
    def supabase_credential(self) -> str:
        """Service key wins over the anon key when both are set."""
        return self.supabase_service_key or self.supabase_key


# Create settings instance
settings = Settings()

if os.getenv("DEBUG", "").lower() == "true":
    print("Settings loaded:")
    print(f"  SUPABASE_URL: {'set' if settings.supabase_url else 'MISSING'}")
    print(f"  SUPABASE_KEY: {'set' if settings.supabase_credential else 'MISSING'}")
    print(f"  DATA_SOURCE: {settings.data_source}")
