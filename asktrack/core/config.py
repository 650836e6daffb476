from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "AskTrack API"
    API_PREFIX: str = "/api"

    # Две разные базы: учётки монтажников и инвентарь устройств
    REMK_DATABASE_URL: str
    GPS_DATABASE_URL: str
    DB_ECHO: bool = False
    CREATE_TABLES: bool = True

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str
    JWT_AUDIENCE: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    CORS_ORIGINS: list[str] = ["*"]
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
