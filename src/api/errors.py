# src/api/errors.py

"""Exception taxonomy raised by the catalog API client."""


class CatalogError(Exception):
    """Base class for every failure the API client reports."""

    user_message: str = "Something went wrong. Please try again."


class NetworkError(CatalogError):
    """Transport-level failure: offline, DNS, or a client timeout."""

    user_message = (
        "Could not reach the catalog. Check your connection and try again."
    )


class HttpStatusError(CatalogError):
    """The API answered with a non-2xx status."""

    user_message = "The catalog service returned an error."

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status


class NotFoundError(HttpStatusError):
    """HTTP 404 from the single-product endpoint."""

    user_message = "Product not found."

    def __init__(self, message: str) -> None:
        super().__init__(404, message)


class DecodeError(CatalogError):
    """The response body did not match the expected shape."""

    user_message = "The catalog sent data we could not read."


class ValidationError(CatalogError):
    """Caller input rejected before any network call was made."""

    user_message = "Invalid request."

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.user_message = message
