from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    database_url: str = Field("sqlite:///./france_geo.db")
    pool_size: int = Field(10)
    max_overflow: int = Field(20)
    pool_timeout: int = Field(30)  # Connection timeout in seconds
    pool_recycle: int = Field(1800)  # Recycle connections every 30 minutes
    pool_pre_ping: bool = Field(True)
    echo: bool = Field(False)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


class GeoSettings(BaseSettings):
    max_population: int = Field(50_000_000)
    max_top_n: int = Field(1000)
    unknown_department_label: str = Field("Unknown department")


class SyncSettings(BaseSettings):
    departments_api_url: str = Field("https://geo.api.gouv.fr/departements")
    timeout_seconds: int = Field(10)


class AppSettings(BaseSettings):
    debug: bool = Field(False)
    allowed_hosts: str = Field("http://localhost:3000,http://localhost:8000")
    create_tables_on_startup: bool = Field(True)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    geo: GeoSettings = Field(default_factory=GeoSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def strip_allowed_hosts(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Convert allowed_hosts string to list of http(s) origins."""
        hosts = []
        for host in self.allowed_hosts.split(","):
            host = host.strip().rstrip("/")
            if host.startswith(("http://", "https://")):
                hosts.append(host)
        return hosts or ["http://localhost:3000", "http://localhost:8000"]

    class Config:
        env_prefix = "APP_"
        case_sensitive = False
        env_nested_delimiter = "__"
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"


settings: AppSettings = AppSettings()

if __name__ == "__main__":
    print(settings.model_dump())
