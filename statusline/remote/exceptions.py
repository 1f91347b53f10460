"""Remote fetch exception classes.

Contains all exception classes for HTTP collaborators:
- FetchError: Base exception for remote fetch errors
- MissingCredentialError: Raised when no bearer token is available
- MalformedResponseError: Raised when a response can't be interpreted
"""

from statusline.exceptions import CollaboratorError


class FetchError(CollaboratorError):
    """Base exception for remote fetch errors."""

    pass


class MissingCredentialError(FetchError):
    """Raised when the usage API credential is not available."""

    pass


class MalformedResponseError(FetchError):
    """Raised when a response is not the JSON shape we expect."""

    pass
