"""Environment-based configuration for the brief parser service."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Brief parser settings, loaded from environment variables."""

    # Server
    PORT: int = 8092
    CORS_ORIGIN: str = "*"

    # OpenAI connection (empty key = AI parsing disabled, heuristic fallback only)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4"
    OPENAI_MAX_TOKENS: int = 1000
    OPENAI_TEMPERATURE: float = 0.3  # low for consistent parsing

    # OpenAI timeouts and retry
    OPENAI_TIMEOUT_SECONDS: int = 30
    OPENAI_CONNECT_TIMEOUT: int = 10
    OPENAI_RETRY_ATTEMPTS: int = 2
    OPENAI_RETRY_DELAY: float = 1.0
    OPENAI_RETRY_BACKOFF: float = 2.0

    # Request validation
    MIN_BRIEF_LENGTH: int = 10

    model_config = {"env_prefix": "", "case_sensitive": True}


settings = Settings()
