class PartyAssetsError(Exception):
    """Base exception for Party Assets errors."""
    pass

class ConfigError(PartyAssetsError):
    """Configuration loading specific errors."""
    pass

class DataSourceError(PartyAssetsError):
    """Unreadable or malformed import source, or report I/O failure."""
    pass

class IntegrationError(PartyAssetsError):
    """Failures talking to an external service (e.g. Party)."""
    pass


class Problem(PartyAssetsError):
    """
    Structured failure carrying an HTTP status, a short title and a human readable detail.
    """

    def __init__(self, status: int, title: str, detail: str | None = None):
        super().__init__(detail or title)
        self.status = status
        self.title = title
        self.detail = detail
