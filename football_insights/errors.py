from typing import Optional


class APIError(Exception):
    """Unified error class for everything that can fail while talking to API-Football."""

    retryable = False

    def __init__(self, source: str, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }


class ConfigurationError(APIError):
    """Credentials or endpoint settings are missing; fatal for every query."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__("config", "CONFIG", message, details)


class NetworkError(APIError):
    """Transport-level failure (DNS, connection reset, timeout)."""

    retryable = True

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__("APIFootball", "NETWORK", message, details)


class UpstreamError(APIError):
    """Non-2xx response or an in-payload ``errors`` block."""

    retryable = True

    def __init__(self, message: str, status: Optional[int] = None, details: Optional[str] = None):
        code = str(status) if status is not None else "PAYLOAD"
        super().__init__("APIFootball", code, message, details)
        self.status = status


class TeamNotFound(APIError):
    """Search (and the transliterated retry, if any) returned nothing."""

    def __init__(self, query: str):
        super().__init__(
            "APIFootball",
            "NOT_FOUND",
            "Team not found. Try refining the name.",
            details=query,
        )
        self.query = query


class ValidationError(ValueError):
    """Bad request input rejected before any upstream call."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}
