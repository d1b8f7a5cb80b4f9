from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Elasticsearch
    elastic_url: str = Field("", description="Elasticsearch address, e.g. https://es:9200")
    elastic_username: str = Field("", description="Basic auth username")
    elastic_password: str = Field("", description="Basic auth password")
    elastic_request_timeout: float = Field(10.0, description="Per-request timeout in seconds")

    # Document store
    document_store_backend: Literal["elasticsearch", "memory"] = Field("elasticsearch")

    # Partitioning
    telemetry_index_prefix: str = Field("telemetry")
    telemetry_partition_granularity: Literal["year", "month", "day"] = Field("year")

    # Logging
    log_level: str = Field("INFO")
    log_format: Literal["structured", "simple"] = Field("structured")
    log_file: Optional[str] = Field(None, description="Also write logs to this file")

    # Server
    host: str = Field("0.0.0.0")
    port: int = Field(8080)


settings = Settings()

tags_metadata = [
    {
        "name": "Health",
        "description": "Liveness probe.",
    },
    {
        "name": "Telemetry",
        "description": "Anonymous telemetry submission.",
    },
]
