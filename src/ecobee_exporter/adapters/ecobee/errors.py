"""Errors raised by the ecobee API adapter."""

# ecobee API status code for an expired access token
STATUS_TOKEN_EXPIRED = 14


class EcobeeError(Exception):
    """Base class for ecobee adapter errors."""


class EcobeeAuthError(EcobeeError):
    """No usable credentials, or the token endpoint rejected them."""


class EcobeeAPIError(EcobeeError):
    """The ecobee API answered with a non-zero status code.

    Attributes:
        status_code: ecobee status code from the response body.
        message: ecobee status message.
        http_status: HTTP status of the response.
    """

    def __init__(self, status_code: int, message: str, http_status: int = 0) -> None:
        super().__init__(f"ecobee API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.http_status = http_status

    @property
    def token_expired(self) -> bool:
        return self.status_code == STATUS_TOKEN_EXPIRED
