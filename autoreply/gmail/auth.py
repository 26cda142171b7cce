"""OAuth credentials for the Gmail API.

The reply workflow needs two scopes only: read the message being answered
and save the reply as a draft. Client credentials and the cached token live
next to the template library in ~/.autoreply unless overridden.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import Resource, build

from autoreply.templates.storage import DEFAULT_DATA_DIR

from .exceptions import NonInteractiveAuthError, ScopeMismatchError

logger = logging.getLogger(__name__)

GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.compose",
]


def _resolve_path(explicit: Optional[Path], env_var: str, file_name: str) -> Path:
    if explicit:
        return Path(explicit)
    if os.environ.get(env_var):
        return Path(os.environ[env_var])
    return DEFAULT_DATA_DIR / file_name


class GmailAuthenticator:
    """Builds an authorized Gmail service, caching the token on disk.

    Paths come from the arguments, then GMAIL_CREDENTIALS_PATH and
    GMAIL_TOKEN_PATH, then ~/.autoreply. Setting GMAIL_NON_INTERACTIVE (or
    interactive=False) makes a missing or unusable token an error instead
    of opening a browser.
    """

    def __init__(
        self,
        credentials_path: Optional[Path] = None,
        token_path: Optional[Path] = None,
        interactive: bool = True,
    ):
        self._credentials_path = _resolve_path(
            credentials_path, "GMAIL_CREDENTIALS_PATH", "credentials.json"
        )
        self._token_path = _resolve_path(token_path, "GMAIL_TOKEN_PATH", "gmail_token.json")
        self._interactive = interactive and not os.environ.get("GMAIL_NON_INTERACTIVE")
        self._service: Optional[Resource] = None

    @property
    def credentials_path(self) -> Path:
        return self._credentials_path

    @property
    def token_path(self) -> Path:
        return self._token_path

    def _load_token(self) -> Optional[Credentials]:
        """Read the cached token, discarding it if it lacks a needed scope.

        Raises:
            ScopeMismatchError: If scopes are missing and re-authorizing is not allowed
        """
        if not self._token_path.exists():
            return None

        creds = Credentials.from_authorized_user_file(str(self._token_path), GMAIL_SCOPES)
        granted = set(creds.granted_scopes or creds.scopes or [])
        if granted.issuperset(GMAIL_SCOPES):
            return creds

        if not self._interactive:
            raise ScopeMismatchError(required_scopes=GMAIL_SCOPES, token_scopes=sorted(granted))
        logger.info("Cached Gmail token lacks draft scope, re-authorizing")
        self._token_path.unlink()
        return None

    def _authorize(self, creds: Optional[Credentials]) -> Credentials:
        """Refresh an expired token or run the browser consent flow.

        Raises:
            NonInteractiveAuthError: If consent is needed but not allowed
            FileNotFoundError: If the OAuth client credentials file is missing
        """
        if creds and creds.expired and creds.refresh_token:
            creds.refresh(Request())
            return creds

        if not self._interactive:
            raise NonInteractiveAuthError(
                "No valid token exists" if not creds else "Token expired without refresh token"
            )
        if not self._credentials_path.exists():
            raise FileNotFoundError(
                f"Credentials file not found at {self._credentials_path}. "
                "Download an OAuth desktop client from Google Cloud Console."
            )
        flow = InstalledAppFlow.from_client_secrets_file(
            str(self._credentials_path), GMAIL_SCOPES
        )
        return flow.run_local_server(port=0)

    def get_service(self) -> Resource:
        """Get or lazily create the Gmail API service."""
        if self._service is None:
            creds = self._load_token()
            if not creds or not creds.valid:
                creds = self._authorize(creds)
                self._token_path.parent.mkdir(parents=True, exist_ok=True)
                self._token_path.write_text(creds.to_json())
            self._service = build("gmail", "v1", credentials=creds)
        return self._service
