"""
Uyuni provider errors.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .diagnostics import Diagnostic


class UyuniProviderError(Exception):
    """Base exception for all Uyuni provider errors."""
    pass


class ConfigurationError(UyuniProviderError):
    """Missing or unknown connection parameters, or client initialization failure.

    Attributes:
        diagnostics: Every diagnostic collected before configuration aborted
    """

    def __init__(self, diagnostics: list["Diagnostic"]):
        self.diagnostics = list(diagnostics)
        summaries = "; ".join(d.summary for d in self.diagnostics)
        super().__init__(summaries or "Provider configuration failed")


class ValidationError(UyuniProviderError):
    """Malformed resource plan, raised before any remote call is made."""

    def __init__(self, message: str, attribute: str | None = None):
        self.message = message
        self.attribute = attribute
        if attribute:
            message = f"{attribute}: {message}"
        super().__init__(message)


class UyuniAPIError(UyuniProviderError):
    """Transport or remote error from the Uyuni HTTP API.

    Attributes:
        message: Error message from the API (or transport layer)
        endpoint: API endpoint that failed
        status_code: HTTP status code, None for transport failures
    """

    def __init__(self, message: str, endpoint: str, status_code: int | None = None):
        self.message = message
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(message)


class RemoteOperationError(UyuniProviderError):
    """A create/read/delete/list call failed against the remote API.

    Wraps exactly one underlying error together with the operation context.

    Attributes:
        summary: Short user-facing title
        operation: Operation name (create, read, delete, list)
        login: Login involved, None for listing
        cause: The underlying transport or API error
    """

    summary = "Uyuni operation failed"
    operation = ""

    def __init__(self, detail: str, cause: Exception, login: str | None = None):
        self.detail = detail
        self.cause = cause
        self.login = login
        super().__init__(detail)


class RemoteCreateError(RemoteOperationError):
    summary = "Error creating user"
    operation = "create"


class RemoteReadError(RemoteOperationError):
    summary = "Error Reading Uyuni user"
    operation = "read"


class RemoteDeleteError(RemoteOperationError):
    summary = "Error Deleting Uyuni user"
    operation = "delete"


class RemoteListError(RemoteOperationError):
    summary = "Unable to Read Uyuni user"
    operation = "list"
