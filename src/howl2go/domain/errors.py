"""Error types raised by the core and surfaced by the API layer."""


class Howl2GoError(Exception):
    """Base error carrying a client-facing message and HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidQuery(Howl2GoError):
    """Malformed pagination, filter or payload parameters."""

    status_code = 400


class AuthenticationRequired(Howl2GoError):
    """The operation needs an authenticated user."""

    status_code = 401


class Forbidden(Howl2GoError):
    """The user may not access the requested resource."""

    status_code = 403


class NotFound(Howl2GoError):
    """A referenced entity does not exist."""

    status_code = 404


class Conflict(Howl2GoError):
    """The request duplicates an existing entity."""

    status_code = 409


class UpstreamFailure(Howl2GoError):
    """The backing store failed or returned no data for a write."""

    status_code = 502
