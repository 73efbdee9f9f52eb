"""Settings for the image resolver."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from commons_autofill.app.constants import (
    CACHE_KEY,
    COMMONS_API,
    FAVORITES_KEY,
    WIKIDATA_API,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    commons_api_url: str = Field(COMMONS_API, validation_alias="COMMONS_API_URL")
    wikidata_api_url: str = Field(WIKIDATA_API, validation_alias="WIKIDATA_API_URL")

    fetch_connect_timeout_seconds: float = Field(5.0, validation_alias="FETCH_CONNECT_TIMEOUT_SECONDS")
    fetch_read_timeout_seconds: float = Field(15.0, validation_alias="FETCH_READ_TIMEOUT_SECONDS")
    # Wikimedia rejects requests without a descriptive User-Agent.
    fetch_user_agent: str = Field(
        "commons-autofill/0.1 (band image attribution lookup)",
        validation_alias="FETCH_USER_AGENT",
    )

    thumbnail_width: int = Field(1000, validation_alias="THUMBNAIL_WIDTH")
    wikidata_search_limit: int = Field(6, validation_alias="WIKIDATA_SEARCH_LIMIT")
    commons_search_limit: int = Field(10, validation_alias="COMMONS_SEARCH_LIMIT")

    store_backend: str = Field("file", validation_alias="STORE_BACKEND")
    store_directory: str = Field(".commons_autofill", validation_alias="STORE_DIRECTORY")
    cache_key: str = Field(CACHE_KEY, validation_alias="CACHE_KEY")
    favorites_key: str = Field(FAVORITES_KEY, validation_alias="FAVORITES_KEY")

    batch_concurrency: int = Field(4, validation_alias="BATCH_CONCURRENCY")
    abort_batch_on_error: bool = Field(True, validation_alias="ABORT_BATCH_ON_ERROR")
