"""GmailClient - reads the email to answer and saves replies as drafts."""

import base64
import logging
from email.mime.text import MIMEText
from typing import Optional

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from autoreply.reply import ReplyDraft

from .auth import GmailAuthenticator
from .body_parser import extract_body, extract_email_address
from .exceptions import GmailError
from .models import IncomingEmail

logger = logging.getLogger(__name__)


class GmailClient:
    """Thin Gmail API wrapper for the reply workflow.

    Example usage:
        client = GmailClient()
        email = client.fetch_message("18c2f...")
        result = find_matching_templates(email.matching_text, library.templates)
        draft = ReplyDraft.from_template(result.matches[0].template)
        client.create_draft(draft, to=email.sender_email, thread_id=email.thread_id)
    """

    def __init__(
        self,
        authenticator: Optional[GmailAuthenticator] = None,
        service: Optional[Resource] = None,
    ):
        """Initialize the client.

        Args:
            authenticator: Gmail authenticator. Defaults to GmailAuthenticator
                with default paths.
            service: Pre-built Gmail API service (for testing).
                If provided, authenticator is ignored.
        """
        self._auth = authenticator
        self._service = service

    def _get_service(self) -> Resource:
        if self._service is None:
            if self._auth is None:
                self._auth = GmailAuthenticator()
            self._service = self._auth.get_service()
        return self._service

    def _parse_message(self, message: dict) -> IncomingEmail:
        payload = message.get("payload", {})
        header_map = {h["name"].lower(): h["value"] for h in payload.get("headers", [])}

        sender_name, sender_email = extract_email_address(header_map.get("from", ""))
        body, _ = extract_body(payload)

        return IncomingEmail(
            id=message["id"],
            thread_id=message.get("threadId", ""),
            subject=header_map.get("subject", ""),
            sender=sender_name,
            sender_email=sender_email,
            body=body,
            message_id_header=header_map.get("message-id", ""),
        )

    def fetch_message(self, message_id: str) -> IncomingEmail:
        """Fetch a message by Gmail ID.

        Raises:
            GmailError: If the API call fails (e.g. unknown ID).
        """
        service = self._get_service()
        try:
            message = (
                service.users()
                .messages()
                .get(userId="me", id=message_id, format="full")
                .execute()
            )
        except HttpError as e:
            raise GmailError("fetch", str(e)) from e

        email = self._parse_message(message)
        logger.info("Fetched message %s: '%s'", email.id, email.subject)
        return email

    def create_draft(
        self,
        draft: ReplyDraft,
        to: str,
        thread_id: Optional[str] = None,
        in_reply_to: Optional[str] = None,
    ) -> str:
        """Save a filled reply as a Gmail draft.

        Args:
            draft: The reply to save; its current body is used as-is.
            to: Recipient address.
            thread_id: Gmail thread to attach the draft to.
            in_reply_to: Message-ID header of the email being answered.

        Returns:
            The Gmail draft ID.

        Raises:
            GmailError: If the API call fails.
        """
        message = MIMEText(draft.body)
        message["to"] = to
        message["subject"] = draft.subject
        if in_reply_to:
            message["In-Reply-To"] = in_reply_to
            message["References"] = in_reply_to

        raw = base64.urlsafe_b64encode(message.as_bytes()).decode()
        body: dict = {"message": {"raw": raw}}
        if thread_id:
            body["message"]["threadId"] = thread_id

        if draft.missing_variables:
            logger.warning(
                "Draft for '%s' still has unfilled placeholders: %s",
                draft.template.name, ", ".join(draft.missing_variables),
            )

        service = self._get_service()
        try:
            created = service.users().drafts().create(userId="me", body=body).execute()
        except HttpError as e:
            raise GmailError("draft creation", str(e)) from e

        logger.info("Created draft %s for '%s'", created["id"], draft.template.name)
        return created["id"]
