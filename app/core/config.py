from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    app_name: str = "Collections"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # DB settings
    db_user: str
    db_pass: str
    db_host: str
    db_port: int
    db_name: str

    # Auth
    jwt_secret: str
    jwt_issuer: str = "cms"
    jwt_audience: str = "cms-clients"
    jwt_expires_minutes: int = 60

    # Celery
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/0"

    # External feed (Instagram recent media)
    feed_endpoint: str = "https://api.instagram.com/v1/users/self/media/recent/"
    feed_timeout_seconds: float = 5.0

    # Image materialization
    media_root: str = "media"
    image_download_timeout_seconds: float = 10.0

    @computed_field
    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_pass}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

settings = Settings()
