class ChordsheetError(Exception):
    """Base exception for chordsheet."""


class FetchError(ChordsheetError):
    """Raised when an HTTP request fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class SourceError(ChordsheetError):
    """Raised when chord-sheet text cannot be read from a location."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot read {location}: {reason}")


class InterchangeError(ChordsheetError):
    """Raised when a structured song payload does not have the expected shape."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid song payload: {reason}")
