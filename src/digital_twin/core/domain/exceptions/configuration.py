"""Configuration-related exceptions."""

from .base import DigitalTwinError


class ConfigurationError(DigitalTwinError):
    """Required configuration is missing or invalid."""

    error_code = "DT_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """A backend was selected but its API key or credentials are not set."""

    error_code = "DT_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """A configuration value is not one of the accepted options."""

    error_code = "DT_CFG_003"
