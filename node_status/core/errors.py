"""Failure taxonomy for calls against the remote node."""


class UpstreamError(Exception):
    """The remote call did not produce a usable answer."""


class UpstreamTimeoutError(UpstreamError, TimeoutError):
    """The remote call exceeded its time bound."""


class MalformedResponse(UpstreamError):
    """The node answered, but the payload could not be parsed."""
