from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

class AppSettings(BaseSettings):
    name: str = "Party Assets"
    version: str = "1.0.0"

class PathSettings(BaseSettings):
    db_path: Path = Path("./data/partyassets.db")


class StaticAssetInfo(BaseSettings):
    """
    Values shared by every asset created in one PR3 import run.
    """
    origin: str = "PR3"
    type: str = "PERMIT"
    description: str = "Parkeringstillstånd"
    municipality_id: str = "2281"


class PR3ImportSettings(BaseSettings):
    enabled: bool = True
    static_asset_info: StaticAssetInfo = StaticAssetInfo()


class PartySettings(BaseSettings):
    base_url: str = "http://localhost:8081/party"
    municipality_id: str = "2281"
    timeout_seconds: float = 10.0
    max_retries: int = 3
    backoff_seconds: float = 0.5

class SecuritySettings(BaseSettings):
    """
    Optional auth and request guardrails.
    """
    api_token: Optional[str] = None  # Bearer token or X-API-Key
    basic_user: Optional[str] = None
    basic_pass: Optional[str] = None
    max_upload_mb: int = 15  # Hard cap for uploads (Content-Length guard)

class LoggingSettings(BaseSettings):
    log_requests: bool = True
    level: str = "INFO"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    app: AppSettings = AppSettings()
    paths: PathSettings = PathSettings()
    pr3import: PR3ImportSettings = PR3ImportSettings()
    party: PartySettings = PartySettings()
    security: SecuritySettings = SecuritySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

settings = Settings.load()
