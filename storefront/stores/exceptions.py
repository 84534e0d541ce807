"""Exceptions raised by catalog store implementations."""


class StoreError(Exception):
    """Base exception for catalog store failures.

    Catching this handles any backend problem (network, HTTP status,
    malformed payload) so the caller can report it to the user.
    """

    pass


class StoreHTTPError(StoreError):
    """The hosted backend answered with a 4xx/5xx status or could not be reached.

    A status_code of 0 means the request never got a response.
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url

    @property
    def is_retryable(self) -> bool:
        return self.status_code == 0 or self.status_code >= 500


class StoreTimeoutError(StoreError):
    """A request to the hosted backend exceeded the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class StoreResponseError(StoreError):
    """The backend answered, but the payload was not what the store expected."""

    pass


class StoreConfigurationError(StoreError):
    """The store could not be constructed from the given settings."""

    pass
