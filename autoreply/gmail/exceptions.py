"""Exceptions for the Gmail integration."""


class AuthenticationError(Exception):
    """Raised when Gmail authentication fails."""

    pass


class ScopeMismatchError(AuthenticationError):
    """Raised when the stored token lacks scopes the client needs.

    Usually the token was authorized before the compose scope was added.
    """

    def __init__(self, required_scopes: list[str], token_scopes: list[str]):
        self.required_scopes = required_scopes
        self.token_scopes = token_scopes
        missing = set(required_scopes) - set(token_scopes)
        super().__init__(
            f"Token scopes mismatch. Missing scopes: {missing}. "
            f"Required: {required_scopes}, Token has: {token_scopes}. "
            "Delete the token file and re-authenticate with correct scopes."
        )


class NonInteractiveAuthError(AuthenticationError):
    """Raised when authentication needs a browser but GMAIL_NON_INTERACTIVE is set."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Authentication requires user interaction but GMAIL_NON_INTERACTIVE=1 is set. "
            f"Reason: {reason}. "
            "Either run locally to re-authenticate, or update the stored token."
        )


class GmailError(Exception):
    """Raised when a Gmail API call fails."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Gmail {operation} failed: {detail}")
