"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="KURIR_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Kurir Pintar API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied by create_app().")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("*",),
        description="Permitted web origins for browser clients (CORS).",
    )
    cors_allowed_headers: tuple[str, ...] = Field(
        default=("authorization", "x-client-info", "apikey", "content-type"),
        description="Request headers browsers may send cross-origin.",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    # AI gateway used as the route-ordering oracle
    ai_gateway_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="Chat-completion endpoint that receives route-ordering prompts.",
    )
    ai_gateway_api_key: Optional[str] = Field(
        default=None,
        description="Bearer token for the AI gateway.",
    )
    route_model: str = Field(default="google/gemini-2.5-flash")
    ai_gateway_timeout_seconds: float = Field(default=60.0, gt=0.0)
    validate_route_permutation: bool = Field(
        default=False,
        description="Reject model replies that are not a permutation of the input addresses.",
    )

    @field_validator("frontend_allowed_origins", "cors_allowed_headers", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
