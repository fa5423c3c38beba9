"""Exceptions raised by the Jupiter client.

Every failure is surfaced to the caller as one of these classes. None of
them are retried internally.
"""

from typing import Optional


class JupiterError(Exception):
    """Base exception for Jupiter client errors."""

    def __init__(self, message: str, operation: Optional[str] = None):
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message)
        self.operation = operation


class ParamEncodingError(JupiterError):
    """Request parameters could not be turned into a query string or JSON body."""
    pass


class TransportError(JupiterError):
    """The HTTP exchange itself failed (connectivity, DNS, timeout)."""
    pass


class UnexpectedStatusError(JupiterError):
    """Response status outside the 2xx range."""

    def __init__(
        self,
        status_code: int,
        body: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(f"unexpected status code: {status_code}", operation=operation)
        self.status_code = status_code
        self.body = body


class DecodeError(JupiterError):
    """Response JSON did not match the expected shape."""
    pass


class EnvelopeDecodeError(DecodeError):
    """The generic {data, timeTaken, contextSlot} envelope could not be decoded."""
    pass


class PayloadDecodeError(DecodeError):
    """The response payload could not be decoded into the expected model."""
    pass


class NoQuotesError(JupiterError):
    """The quote endpoint returned an empty route list."""
    pass


class NoRouteAvailableError(JupiterError):
    """Route selection was asked to pick from an empty collection."""
    pass


class AmountParseError(JupiterError):
    """A base-unit amount string is not a valid unsigned 64-bit integer."""

    def __init__(self, field: str, value: object, operation: Optional[str] = None):
        super().__init__(f"failed to parse {field}: {value!r}", operation=operation)
        self.field = field
        self.value = value
