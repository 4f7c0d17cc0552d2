from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
class Settings(BaseSettings):
    """
    Application settings managed by Pydantic.
    Reads from environment variables and/or .env file.
    """
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL: str = "INFO"

    # Base URI of the application; relative hrefs are prefixed with it
    JSONHOME_BASE_URI: str = "http://localhost:8000"
    # Relation types are resolved against this one (defaults to JSONHOME_BASE_URI)
    JSONHOME_RELATION_TYPE_BASE_URI: Optional[str] = None

    # Markdown includes
    JSONHOME_DOC_ROOT_DIR: str = "/docs/*"
    JSONHOME_DOC_SEARCH_PATH: str = "."

    # Static resource catalog (JSON). Empty document when unset
    JSONHOME_RESOURCES_FILE: Optional[str] = None

    # Document publication
    JSONHOME_CACHE_MAX_AGE: int = 3600
    JSONHOME_STRICT: bool = True

    # Config to read from .env file if available
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
        )

    @property
    def relation_type_base_uri(self) -> str:
        return self.JSONHOME_RELATION_TYPE_BASE_URI or self.JSONHOME_BASE_URI


settings = Settings() # type: ignore
