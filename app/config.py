from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Backend ---
    BACKEND_URL: str = "http://localhost:5000"
    BACKEND_TIMEOUT: float = 10.0

    # --- Institute ---
    TIMEZONE: str = "Asia/Colombo"

    # --- JWT (issued by the backend) ---
    JWT_SECRET: str = ""          # empty: read claims without verifying signature
    JWT_ALGORITHM: str = "HS256"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()
