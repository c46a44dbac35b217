# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for various aspects of the application:
# API configuration (version, project name)
# Security settings (secret keys, JWT algorithm)
# Database connection details
# Media storage (Cloudflare R2) and outbound email (SMTP)


import json
from typing import Annotated, List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # API configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "HobbyHub API"
    VERSION: str = "0.1.0"

    # Server URLs
    BASE_URL: str = "http://localhost:8000"

    # Security
    SECRET_KEY: str = "development_secret_key"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    ALGORITHM: str = "HS256"
    TOKEN_COOKIE_NAME: str = "token"

    # Database
    DATABASE_URL: str = "sqlite:///./hobbyhub.db"

    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost",
    ]

    # File uploads
    UPLOAD_DIRECTORY: str = "uploads"
    MAX_UPLOAD_SIZE: int = 25 * 1024 * 1024  # 25 MB
    DEFAULT_COVER_IMAGE_URL: str = (
        "https://images.ctfassets.net/zykafdb0ssf5/68qzkHjCboFfCsSxV2v9S6/"
        "4da75033db02c1339de2a3effb461f7a/missing.png"
    )
    DEFAULT_PROFILE_IMAGE_URL: str = "https://www.gravatar.com/avatar/?d=mp&s=200"

    # Cloudflare R2 Storage
    R2_ENDPOINT: str = ""
    R2_ACCESS_KEY_ID: str = ""
    R2_SECRET_ACCESS_KEY: str = ""
    R2_BUCKET_NAME: str = "hobbyhub-media"
    R2_PUBLIC_URL: str = ""

    # Outbound email
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    EMAIL_FROM: str = "HobbyHub <no-reply@hobbyhub.local>"

    # Development settings - set these differently in production
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            # Handle JSON string format
            try:
                return json.loads(v)
            except ValueError:
                return []
        return v

# Create settings instance
settings = Settings()
