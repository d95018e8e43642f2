from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Student Management System API"
    APP_VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite:///./students.db"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
