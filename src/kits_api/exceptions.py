from typing import Optional


class KitsApiError(Exception):
    """Base exception for kits-couture-api errors."""
    pass


class ConfigError(KitsApiError):
    """Configuration loading specific errors."""
    pass


class InvalidRequest(KitsApiError):
    """Missing or empty required input from the caller."""
    pass


class IntegrationError(KitsApiError):
    """Failure anywhere in the spreadsheet call chain."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DataWarning(KitsApiError):
    """Malformed data in a single cell; never fails the request."""
    pass
