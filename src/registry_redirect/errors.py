"""Custom exceptions for registry-redirect.

Region lookups and blob probes never raise; they report "no route" or
"does not exist" through their return values. These exceptions cover the
surfaces around them: configuration and the command line.
"""


class RedirectorError(RuntimeError):
    """Base class for all registry-redirect errors."""
    pass


# Configuration Errors
class ConfigError(RedirectorError):
    """Invalid or unreadable configuration."""
    pass


class InvalidSettingError(ConfigError):
    """A single setting failed validation."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid configuration in {source}: {detail}")


# Routing Errors
class UnroutableRegionError(RedirectorError):
    """Region has no bucket assigned."""

    def __init__(self, region: str):
        self.region = region
        super().__init__(
            f"Region '{region}' is not routed to any bucket. "
            f"Run 'registry-redirect regions' to list known regions."
        )
