import json
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from kits_api import __version__
from kits_api.exceptions import ConfigError

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"


class AppSettings(BaseSettings):
    name: str = "kits-couture-api"
    version: str = __version__


class ServerSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    allow_origins: list[str] = ["*"]  # dev default; restrict to the storefront domain in prod


class GoogleSettings(BaseSettings):
    spreadsheet_id: Optional[str] = None
    service_account_key: Optional[str] = None  # raw JSON bundle
    service_account_file: Optional[Path] = None
    scopes: list[str] = [SHEETS_SCOPE]
    timeout_seconds: float = 30.0

    def credentials_info(self) -> dict[str, Any]:
        """
        Returns the service-account bundle as a dict.
        Hosting platforms often store the private key with escaped newlines, so those are restored.
        """
        raw = self.service_account_key
        if not raw and self.service_account_file:
            path = Path(self.service_account_file)
            if not path.exists():
                raise ConfigError(f"Service account file not found: {path}")
            raw = path.read_text(encoding="utf-8")
        if not raw:
            raise ConfigError("GOOGLE__SERVICE_ACCOUNT_KEY is missing.")

        try:
            info = json.loads(raw)
        except ValueError as exc:
            raise ConfigError(f"Unable to parse the service account key as JSON: {exc}") from exc
        if not isinstance(info, dict):
            raise ConfigError("Service account key must be a JSON object.")

        missing = [key for key in ("client_email", "private_key") if not info.get(key)]
        if missing:
            raise ConfigError(f"Service account key lacks: {', '.join(missing)}")

        info["private_key"] = str(info["private_key"]).replace("\\n", "\n")
        return info


class KitSettings(BaseSettings):
    # Tab naming per route. Existing tabs may already use either casing, so the two are kept separate.
    kits_tenant_case: Literal["lower", "preserve"] = "lower"
    admin_tenant_case: Literal["lower", "preserve"] = "preserve"
    repair_missing_header: bool = True


class SecuritySettings(BaseSettings):
    admin_token: Optional[str] = None  # Bearer token or X-API-Key for /admin routes


class LoggingSettings(BaseSettings):
    log_requests: bool = True
    level: str = "INFO"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    google: GoogleSettings = GoogleSettings()
    kits: KitSettings = KitSettings()
    security: SecuritySettings = SecuritySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        with open(path, "r") as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    def require_google(self) -> dict[str, Any]:
        """
        Fails fast when the spreadsheet cannot be reached with this configuration.
        Returns the parsed credential bundle.
        """
        if not self.google.spreadsheet_id:
            raise ConfigError("GOOGLE__SPREADSHEET_ID is missing.")
        return self.google.credentials_info()
