from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="APP_", env_file=None, extra="ignore")

    port: int = 8080
    data_dir: str = "."
    database_url: str | None = None
    storage_path: str = "uploads"

    admin_username: str = "admin"
    admin_password: str = "admin123"

    cors_origins: list[str] = ["*"]
    ping_message: str = "ping"
    log_level: str = "INFO"

    @property
    def db_url(self) -> str:
        if self.database_url:
            return self.database_url
        # sqlite файл рядом с данными
        return f"sqlite:///{self.data_dir.rstrip('/')}/hr_service.db"
