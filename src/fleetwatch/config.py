from pathlib import Path
from typing import ClassVar, Optional
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

class AppSettings(BaseSettings):
    name: str = "Fleetwatch"
    version: str = "1.0.0"

class SheetSettings(BaseSettings):
    """
    Published spreadsheet sources, one sheet per data kind.
    Tabs are addressed by gid; date_gids maps a date label to the tab holding that day.
    """
    offline_sheet_id: str = "180CqEujgBjJPjP9eU8C--xMj-VTBSrRUrM_98-S0gjo"
    speed_sheet_id: str = "1y499rxvnlTY8JSp5eyI_ZEm_4c2rDm7hNim3VFH8PSk"
    alerts_sheet_id: str = "1Et8hgNDrZDuQbAHh7jvFpi0bsebVBcPsnZELPAYMu6U"
    default_date: str = "25 August"
    default_gid: dict[str, str] = {
        "offline": "0",
        "speed": "293366971",
        "alerts": "1378822335",
    }
    date_gids: dict[str, dict[str, str]] = {
        "speed": {"25 August": "293366971", "24 August": "0", "23 August": "1"},
        "alerts": {"25 August": "1378822335", "24 August": "0", "23 August": "1"},
    }
    api_key: Optional[str] = None
    service_account_file: Optional[Path] = None
    timeout_seconds: float = 30.0
    max_attempts: int = 1
    backoff_seconds: float = 1.0

class ThresholdSettings(BaseSettings):
    offline_client_token: str = "g4s"
    offline_min_hours: float = 24.0
    offline_critical_hours: float = 48.0
    speed_warning: float = 75.0
    speed_alarm: float = 90.0

class StorageSettings(BaseSettings):
    """
    Status overlay persistence:
    - sqlite (local/dev default)
    - supabase (hosted postgres table over PostgREST)
    - firestore
    """
    backend: str = "sqlite"  # sqlite|supabase|firestore
    db_path: Path = Path("./data/fleetwatch.db")
    table: str = "offline_status"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    firestore_project_id: Optional[str] = None
    firestore_database: str = "(default)"
    firestore_collection: str = "offline_status"
    author_tag: str = "Admin"
    timeout_seconds: float = 15.0

class LoggingSettings(BaseSettings):
    log_requests: bool = True
    level: str = "INFO"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    app: AppSettings = AppSettings()
    sheets: SheetSettings = SheetSettings()
    thresholds: ThresholdSettings = ThresholdSettings()
    storage: StorageSettings = StorageSettings()
    logging: LoggingSettings = LoggingSettings()

    yaml_path: ClassVar[Optional[Path]] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats the YAML file; explicit kwargs beat both.
        sources = [init_settings, env_settings, dotenv_settings]
        if cls.yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls.yaml_path))
        sources.append(file_secret_settings)
        return tuple(sources)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        cls.yaml_path = Path(path)
        try:
            return cls()
        finally:
            cls.yaml_path = None

settings = Settings.load()
