"""n8n adapter exceptions.

Custom exception hierarchy for n8n REST API errors.
"""


class N8nAPIError(Exception):
    """Base exception for n8n adapter.

    ``message`` is the remote service's error message when it sent one,
    otherwise the transport error text.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class N8nAuthError(N8nAPIError):
    """Invalid or missing API key."""

    pass


class N8nNotFoundError(N8nAPIError):
    """Workflow not found."""

    pass
