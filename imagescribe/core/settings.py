"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Covers both halves: the prompt proxy (model service) and the client session (proxy URL, speech).
"""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # unrelated env vars are common on shared hosts
        protected_namespaces=(), # allow model_* field names
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=8000, description="Port for FastAPI/Uvicorn")
    log_level: str = Field(default="INFO", description="Root logging level")

    # CORS
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:9002"],
        description="Allowed origins for browser apps"
    )

    # ---- Hosted model (OpenAI-compatible chat completions) ----
    # MODEL_API_KEY from .env or shell; OPENAI_API_KEY is honored as a fallback at call time.
    model_api_base: str = Field(default="https://api.openai.com/v1")
    model_api_key: Optional[str] = None
    model_name: str = Field(default="gpt-4o-mini", description="Vision-capable chat model")
    model_max_tokens: int = Field(default=512)
    model_temperature: float = Field(default=0.4)
    model_timeout_s: float = Field(default=60.0, description="Upper bound for one model round trip")

    # ---- Prompt flow knobs ----
    caption_count: int = Field(default=3, ge=1, le=10, description="Captions requested per image")
    max_photo_bytes: int = Field(default=10 * 1024 * 1024, description="Decoded size cap for photoDataUri")

    # ---- Client session ----
    proxy_base_url: str = Field(default="http://localhost:8000", description="Where the client finds the prompt proxy")
    speech_rate: int = Field(default=150)       # words per minute for pyttsx3
    speech_volume: float = Field(default=1.0)   # 0.0 .. 1.0

settings = Settings()
