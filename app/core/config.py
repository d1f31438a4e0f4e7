"""
Configuration management using Pydantic settings.
"""
from typing import List, Union
import os
from pydantic import AnyHttpUrl, validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
load_dotenv()



class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "AI Study Assistant"
    DEBUG: bool = True
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./study_assistant.db")

    # File Upload Configuration
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "./uploads")
    ALLOWED_FILE_EXTENSIONS: List[str] = [".pdf"]
    MAX_UPLOAD_SIZE: int = int(os.getenv("MAX_UPLOAD_SIZE", 10485760))  # 10MB
    MIN_EXTRACTED_TEXT_LENGTH: int = 20

    # LLMs Configuration (Groq exposes an OpenAI-compatible endpoint)
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")
    LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
    SUMMARY_MODEL: str = os.getenv("SUMMARY_MODEL", "llama-3.1-8b-instant")
    QUIZ_MODEL: str = os.getenv("QUIZ_MODEL", "llama-3.1-8b-instant")
    SCHEDULE_MODEL: str = os.getenv("SCHEDULE_MODEL", "llama-3.3-70b-versatile")
    MAX_QUIZ_TEXT_CHARS: int = 12000
    MAX_SCHEDULE_TEXT_CHARS: int = 50000

    # LangSmith Tracing Configuration
    LANGSMITH_TRACING: bool = os.getenv("LANGSMITH_TRACING", "false").lower() == "true"
    LANGSMITH_ENDPOINT: str = os.getenv("LANGSMITH_ENDPOINT", "")
    LANGSMITH_API_KEY: str = os.getenv("LANGSMITH_API_KEY", "")
    LANGSMITH_PROJECT: str = os.getenv("LANGSMITH_PROJECT", "")

    # Analytics Configuration
    DEFAULT_DASHBOARD_WINDOW_DAYS: int = 30
    WEAK_TOPIC_LIMIT: int = 5
    WEAK_TOPIC_REVIEW_THRESHOLD: int = 70
    TOPIC_TREND_LENGTH: int = 5
    WEAK_TOPIC_QUIZ_HISTORY: int = 20

    # CORS Configuration
    BACKEND_CORS_ORIGINS: Union[List[AnyHttpUrl], str] = "*"

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if v == "*" or v == ["*"]:
            return "*"
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True


settings = Settings()
