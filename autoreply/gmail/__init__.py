"""Gmail integration: read the email being answered, save replies as drafts.

Public API:
    - GmailClient: fetch_message() and create_draft()
    - GmailAuthenticator: OAuth helper
    - IncomingEmail: Fetched email data model
    - AuthenticationError, ScopeMismatchError, NonInteractiveAuthError, GmailError
"""

from .auth import GmailAuthenticator
from .client import GmailClient
from .exceptions import (
    AuthenticationError,
    GmailError,
    NonInteractiveAuthError,
    ScopeMismatchError,
)
from .models import IncomingEmail

__all__ = [
    "GmailClient",
    "GmailAuthenticator",
    "IncomingEmail",
    "AuthenticationError",
    "ScopeMismatchError",
    "NonInteractiveAuthError",
    "GmailError",
]
