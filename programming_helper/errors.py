class HelperError(Exception):
    """Base class for errors raised by the helper service."""


class ConfigurationError(HelperError):
    """The model credential is missing or the client could not be configured."""


class GatewayUnavailableError(HelperError):
    """`generate` was called on a gateway that has no configured client.

    Callers are expected to check `ModelGateway.is_available()` first, so this
    signals a programming error rather than a runtime condition.
    """


class TransportOrModelError(HelperError):
    """The network call failed or the hosted model reported an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
