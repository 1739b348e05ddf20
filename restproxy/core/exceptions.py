"""Shared exceptions module."""

from typing import Optional


class RestProxyException(Exception):
    """Base exception for restproxy."""

    pass


class ConfigurationError(RestProxyException):
    """Exception raised when a proxy is built with missing or invalid settings."""

    def __init__(self, message: Optional[str] = "Proxy is not configured correctly"):
        """Create a new ConfigurationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class InvalidArgumentError(RestProxyException, ValueError):
    """Exception raised when a required input to a signing or URL helper is missing."""

    def __init__(self, argument: str, message: str = "Missing required argument"):
        """Create a new InvalidArgumentError instance.

        Args:
        ----
            argument (str): The name of the offending argument.
            message (str, optional): The error message. Has default message.

        """
        self.argument = argument
        self.message = message
        super().__init__(f"{message}: {argument}")


class CallStateError(RestProxyException):
    """Exception raised for an invalid call lifecycle transition.

    Raised when a prepared call is mutated or prepared again, when an
    unprepared call is sent, or when results are read before completion.
    """

    def __init__(self, state: str, message: Optional[str] = "Invalid call state"):
        """Create a new CallStateError instance.

        Args:
        ----
            state (str): The state the call was in.
            message (str, optional): The error message. Has default message.

        """
        self.state = state
        self.message = message
        super().__init__(f"{message} (state={state})")


class TransportError(RestProxyException):
    """Exception raised when the request never produced an HTTP response.

    Covers refused connections, timeouts, DNS failures and malformed
    responses. Never retried by restproxy.
    """

    def __init__(self, url: str, message: Optional[str] = "Transport failed"):
        """Create a new TransportError instance.

        Args:
        ----
            url (str): The URL that was being requested.
            message (str, optional): The error message. Has default message.

        """
        self.url = url
        self.message = message
        super().__init__(f"{url}: {message}")


class ProtocolError(RestProxyException):
    """Exception raised when a helper needs a 2xx response and got something else.

    Plain calls never raise this; they complete with the status code set.
    """

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        """Create a new ProtocolError instance.

        Args:
        ----
            status_code (int): The HTTP status returned by the server.
            body (str, optional): The response body, for diagnostics.
            message (str, optional): Custom error message.

        """
        if message is None:
            message = f"Unexpected HTTP status {status_code}"

        self.status_code = status_code
        self.body = body
        self.message = message
        super().__init__(self.message)
