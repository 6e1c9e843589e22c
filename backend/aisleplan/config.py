from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    environment: str = "development"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Store used when a request doesn't name one
    default_store_name: str = ""
    default_store_chain: str = ""

    # Upper bound for /categories/group requests
    max_batch_items: int = 500

    # Route text export
    route_sample_items: int = 3  # items shown for a long section
    route_full_listing_limit: int = 5  # sections up to this size are listed in full

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
