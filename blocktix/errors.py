"""Error hierarchy shared by services and HTTP handlers.

Every error carries a user-safe message and the HTTP status it maps to.
Handlers in main.py render them as ``{"message": ...}``.
"""


class BlockTixError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(BlockTixError):
    """Missing or malformed input, or a rule/availability rejection."""

    status_code = 400


class AuthenticationError(BlockTixError):
    """Bad admin key or bearer token."""

    status_code = 401


class AuthorizationError(BlockTixError):
    """Wallet rejected by the access lists."""

    status_code = 403


class NotFoundError(BlockTixError):
    status_code = 404


class ConfigurationError(BlockTixError):
    """Server-side setting required by the request is missing."""

    status_code = 500
