"""Custom exceptions for HomeTax."""


class HomeTaxError(Exception):
    """Base exception for HomeTax errors."""


class JurisdictionNotFoundError(HomeTaxError):
    """Raised when a selected jurisdiction has no profile in the tax tables."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown jurisdiction: {name}")


class ScenarioNotFoundError(HomeTaxError):
    """Raised when a saved scenario name does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Scenario not found: {name}")


class ConfigurationError(HomeTaxError):
    """Raised when a tax table configuration cannot be loaded."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Configuration error in {source}: {message}")
