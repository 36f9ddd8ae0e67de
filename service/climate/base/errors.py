class StationNotFoundError(ValueError):
    """Raised when a requested station doesn't exist."""


class NoDataError(ValueError):
    """Raised when a request is valid, but no data is available."""


class UnknownUnitError(ValueError):
    """Raised when a unit is not part of the metric registry."""


class DataFetchError(RuntimeError):
    """Raised by fetchers when a data file cannot be retrieved or decoded."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (source={self.source})" if self.source else base
