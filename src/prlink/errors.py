"""Error types raised by the prlink pipeline."""


class PrLinkError(Exception):
    """Base error. The message is what gets reported to the runner."""


class ValidationError(PrLinkError):
    """Invalid or missing input."""


class NotFoundError(PrLinkError):
    """Requested artifact does not exist in the lookup scope."""


class TransportError(PrLinkError):
    """A GitHub API call failed."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.reason = message
        super().__init__(f"Unable to {operation}: {message}")
