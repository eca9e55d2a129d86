"""Exceptions raised by services and rendered as ``{"error": ...}`` responses."""


class GamerlyError(Exception):
    """Base error carrying the HTTP status the handler boundary should answer with."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class MissingConfigError(GamerlyError):
    """A required credential or setting is not configured."""


class BadRequestError(GamerlyError):
    status_code = 400


class UpstreamError(GamerlyError):
    """RAWG, IGDB or Twitch answered with a non-OK status or unreadable body."""

    def __init__(self, message: str, upstream_status: int | None = None, details=None):
        super().__init__(message, status_code=500, details=details)
        self.upstream_status = upstream_status
