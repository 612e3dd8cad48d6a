from pathlib import Path
from typing import Annotated, Any, List, Literal, Optional, Union
from pydantic import AnyUrl, BeforeValidator, PostgresDsn
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

def parse_cors(v: Any) -> Union[List[str], str]:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, (list, str)):
        return v
    raise ValueError(v)

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore",
        env_ignore_empty=True
    )

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Church Management API"
    VERSION: str = "1.0.0"

    ENVIRONMENT: Literal["local", "staging", "production", "test"] = "local"

    # Security (tokens are issued by the identity provider, only verified here)
    SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ADMIN_ROLES: List[str] = ["admin", "super_admin"]

    # CORS Configuration
    BACKEND_CORS_ORIGINS: Annotated[
        Union[List[AnyUrl], str], BeforeValidator(parse_cors)
    ] = []

    # Frontend
    FRONTEND_HOST: str = "http://localhost:3000"

    @property
    def all_cors_origins(self) -> List[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    # Database
    DATABASE_URL: Optional[str] = None
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "church"
    POSTGRES_PORT: int = 5432

    # Uploads
    UPLOAD_DIR: Path = Path("uploads")
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB per file
    MAX_EVENT_IMAGES: int = 10
    MAX_TESTIMONY_IMAGES: int = 3

    # Testimony anti-spam window
    TESTIMONY_SUBMISSION_LIMIT: int = 3
    TESTIMONY_SUBMISSION_WINDOW_HOURS: int = 24

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> Union[PostgresDsn, str]:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

settings = Settings()
