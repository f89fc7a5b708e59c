"""Exceptions raised by the Wargaming API client."""


class WGAPIError(Exception):
    """Base class for every error raised by wgapi."""

    pass


class InvalidConfiguration(WGAPIError, ValueError):
    """Raised when a client cannot be constructed from the given settings."""

    pass


class InvalidArgument(WGAPIError, ValueError):
    """Raised when a setter or an API operation receives an unusable value."""

    pass


class TransportError(WGAPIError):
    """Raised when the HTTP exchange could not be completed."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")
