"""
Domain errors raised by the service layer.

Routers do not catch these; ``main.py`` maps them onto HTTP responses.
"""


class DealershipError(Exception):
    """Base class for errors the API reports back to the caller."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DealershipError):
    """A referenced vehicle, vendor, expense or transaction does not exist."""

    status_code = 404


class ConflictError(DealershipError):
    """The change would break a uniqueness or reference constraint."""

    status_code = 409
