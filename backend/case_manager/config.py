from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database Configuration
    # Use SQLite by default for easy local development
    # Set db_type to "mysql" and configure mysql settings for production
    db_type: str = "sqlite"  # "sqlite" or "mysql"

    # SQLite settings
    sqlite_path: str = "case_manager.db"

    # MySQL settings (used when db_type="mysql")
    db_host: str = "localhost"
    db_port: int = 3306
    db_name: str = "case_manager"
    db_user: str = "root"
    db_password: str = ""

    # Application Settings
    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = 60 * 24  # 24 hours
    api_port: int = 8000

    # Call log dates and times are shown in this zone
    display_timezone: str = "America/New_York"

    @property
    def database_url(self) -> str:
        if self.db_type == "sqlite":
            return f"sqlite:///./{self.sqlite_path}"
        return f"mysql+pymysql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
