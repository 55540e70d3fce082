from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://nutrifit_user:nutrifit_password@db:5432/nutrifit_db"
    # Durable key/value storage for fitness documents and cached sessions
    STORAGE_URL: str = "sqlite:///./nutrifit_storage.db"
    RESET_DATABASE: bool = False

    SECRET_KEY: str = "SECRET_KEY_FOR_NUTRIFIT"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    API_BASE_URL: str = "http://localhost:8000/api/v1"
    API_TIMEOUT_SECONDS: float = 30.0

    FITNESS_DATA_KEY: str = "fitnessData"
    TOKEN_STORAGE_KEY: str = "token"
    USER_STORAGE_KEY: str = "user"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


settings = Settings()
