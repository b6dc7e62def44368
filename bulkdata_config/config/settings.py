"""Process settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Bulk Data API deployment
    # Root of the BCDA deployment, e.g. https://sandbox.bcda.cms.gov
    base_url: str = ""
    client_id: str = ""
    client_secret: str = ""

    # Logging
    log_level: str = "INFO"
    audit_log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def environment(self) -> dict[str, str]:
        """Snapshot of the inputs the descriptor is built from."""
        return {
            "BASE_URL": self.base_url,
            "CLIENT_ID": self.client_id,
            "CLIENT_SECRET": self.client_secret,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
