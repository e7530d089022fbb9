"""Domain errors for the building lookup service."""


class BuildingHealthError(Exception):
    """Base class for building lookup failures."""

    error_code = "BUILDING_HEALTH_ERROR"


class InvalidBBLError(BuildingHealthError, ValueError):
    """Raised when a BBL cannot be normalized to 10 digits."""

    error_code = "INVALID_BBL"


class ConfigError(BuildingHealthError):
    """Raised for unknown dataset keys or malformed settings."""

    error_code = "CONFIG_ERROR"
