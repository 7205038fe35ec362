from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseModel):
    service_url: str = "http://localhost:8080"
    """Base URL of the content metadata service"""
    cache_enabled: bool = True
    """Memoize retrieved configs for the lifetime of the client"""
    request_timeout: float = 30
    """Total timeout (seconds) of sessions created by create_client_session"""


class ApplicationSettings(BaseModel):
    config_dir: str = "/config"
    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)"""
    log_format: str = "text"
    """Log format: 'text' for human-readable, 'json' for machine-readable"""
    log_file: str | None = None
    """Optional log file path (relative to config_dir/logs/). If not set, logs to stdout only"""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        env_prefix="CONTENT_METADATA_",
        env_nested_delimiter="__",
        nested_model_default_partial_update=True,
        env_file=(".env.local", ".env"),
        extra="ignore",
    )

    client: ClientSettings = ClientSettings()
    app: ApplicationSettings = ApplicationSettings()
