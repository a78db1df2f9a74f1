"""Investigator configuration — service identity, server binding and telemetry knobs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "INVESTIGATOR_"}

    # Service identity
    service_name: str = "change-investigator"
    service_version: str = "1.0.0"

    # Telemetry; an empty endpoint disables OTLP export
    otlp_endpoint: str = ""
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8100


settings = Settings()
