class FleetwatchError(Exception):
    """Base exception for Fleetwatch errors."""
    pass

class ConfigError(FleetwatchError):
    """Configuration loading specific errors."""
    pass

class DataSourceError(FleetwatchError):
    """Spreadsheet download or parse errors."""
    pass

class StatusStoreError(FleetwatchError):
    """Status overlay persistence errors."""
    pass
