from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore[import-not-found]


OURAIRPORTS_BASE_URL = "https://davidmegginson.github.io/ourairports-data"


class Settings(BaseSettings):
    app_env: str = "local"
    app_name: str = "geography"
    port: int = 8090

    mysql_host: str = "127.0.0.1"
    mysql_port: int = 3306
    mysql_user: str = "geo_user"
    mysql_password: str = "geo_pass"
    mysql_db: str = "geography"
    # Full SQLAlchemy URL; takes precedence over the mysql_* parts when set
    database_url: str | None = None

    # Ceiling for range queries; more rows than this is reported as an error
    max_results: int = 250

    # CSV sources
    data_dir: str = "data"
    countries_url: str = f"{OURAIRPORTS_BASE_URL}/countries.csv"
    regions_url: str = f"{OURAIRPORTS_BASE_URL}/regions.csv"
    airports_url: str = f"{OURAIRPORTS_BASE_URL}/airports.csv"
    runways_url: str = f"{OURAIRPORTS_BASE_URL}/runways.csv"
    frequencies_url: str = f"{OURAIRPORTS_BASE_URL}/airport-frequencies.csv"
    download_timeout_sec: float = 60.0

    cors_origins: list[str] | str = "*"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str] | str:
        if isinstance(v, str):
            if v == "*":
                return "*"
            if "," in v:
                return [origin.strip() for origin in v.split(",") if origin.strip()]
            return [v.strip()] if v.strip() else "*"
        if isinstance(v, list):
            return v
        return "*"

    @field_validator("max_results")
    @classmethod
    def check_max_results(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_results must be at least 1")
        return v

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"mysql+pymysql://{self.mysql_user}:{self.mysql_password}"
            f"@{self.mysql_host}:{self.mysql_port}/{self.mysql_db}?charset=utf8mb4"
        )

    @property
    def source_urls(self) -> dict[str, str]:
        return {
            "countries": self.countries_url,
            "regions": self.regions_url,
            "airports": self.airports_url,
            "runways": self.runways_url,
            "frequencies": self.frequencies_url,
        }


settings = Settings()
