"""Data model for an email fetched from Gmail."""

from dataclasses import dataclass
from typing import Any


@dataclass
class IncomingEmail:
    """An email being answered.

    Attributes:
        id: Gmail message ID
        thread_id: Gmail thread ID, used to attach the reply draft to the thread
        subject: Subject line
        sender: Sender display name (or address if no name)
        sender_email: Sender address, the default reply recipient
        body: Plain text body
        message_id_header: RFC 822 Message-ID, used for In-Reply-To
    """

    id: str
    thread_id: str
    subject: str
    sender: str
    sender_email: str
    body: str
    message_id_header: str = ""

    @property
    def matching_text(self) -> str:
        """Text fed to the template matcher: subject followed by body."""
        return f"{self.subject}\n\n{self.body}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "thread_id": self.thread_id,
            "subject": self.subject,
            "sender": self.sender,
            "sender_email": self.sender_email,
            "body": self.body,
            "message_id_header": self.message_id_header,
        }
