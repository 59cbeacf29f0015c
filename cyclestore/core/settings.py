from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, case_sensitive=False)

    # App
    app_name: str = "Cyclestore API"
    debug: bool = False
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Browser client allowed by CORS
    frontend_url: str = "http://localhost:5173"

    # Database
    database_url: str = "sqlite:///./cyclestore.db"

    # Security
    jwt_secret: str = "dev-jwt-secret-change-me"
    jwt_algorithm: str = "HS256"
    token_expires_hours: int = 24


settings = Settings()
