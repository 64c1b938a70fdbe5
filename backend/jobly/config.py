from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".jobly"
    # Signing key for bearer tokens. Override in every non-local deployment.
    secret_key: str = "secret-dev"
    token_algorithm: str = "HS256"
    token_ttl_seconds: int = 24 * 60 * 60
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "jobly.sqlite"

    model_config = {"env_prefix": "JOBLY_"}


settings = Settings()
