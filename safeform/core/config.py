from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)
    
    # Form engine defaults
    FORM_VALIDATE_ON_CHANGE: bool = False
    FORM_VALIDATE_ON_BLUR: bool = True
    FORM_SUBMIT_ERROR_KEY: str = "_submit"
    
    # Mock collaborators
    MOCK_LATENCY_SECONDS: float = 1.5
    MOCK_OTP_CODE: str = "123456"
    
    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
