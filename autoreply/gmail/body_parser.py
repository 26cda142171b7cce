"""MIME payload helpers for turning a Gmail message into matchable text."""

import base64
import re
from html.parser import HTMLParser
from typing import Optional

_BLOCK_TAGS = {"p", "div", "br", "tr", "li", "h1", "h2", "h3", "h4", "h5", "h6"}
_HIDDEN_TAGS = {"script", "style", "head", "title", "meta"}


def decode_base64(data: str) -> str:
    """Decode Gmail's URL-safe base64 data, restoring stripped padding."""
    padding = -len(data) % 4
    decoded_bytes = base64.urlsafe_b64decode(data + "=" * padding)
    return decoded_bytes.decode("utf-8", errors="replace")


def extract_body(payload: dict) -> tuple[str, Optional[str]]:
    """Extract plain text and HTML bodies from a message payload.

    Handles a body directly on the payload as well as (nested) multipart
    messages. The first text/plain and text/html parts win. When only HTML
    is present the plain text is derived from it.

    Args:
        payload: Gmail message payload dictionary

    Returns:
        Tuple of (plain_text_body, html_body). HTML may be None.
    """
    plain_text = ""
    html_body = None

    pending = [payload]
    while pending:
        part = pending.pop(0)
        mime_type = part.get("mimeType", "")
        data = part.get("body", {}).get("data")

        if data and mime_type == "text/html":
            if html_body is None:
                html_body = decode_base64(data)
        elif data and (mime_type == "text/plain" or part is payload):
            if not plain_text:
                plain_text = decode_base64(data)
        elif part.get("parts"):
            pending = list(part["parts"]) + pending

    if not plain_text and html_body:
        plain_text = html_to_plain_text(html_body)

    return plain_text, html_body


def extract_email_address(header_value: str) -> tuple[str, str]:
    """Split a From/To header into (display name, address).

    The display name falls back to the address when absent.
    """
    match = re.match(r'^"?([^"<]*)"?\s*<([^>]+)>$', header_value.strip())
    if match:
        name = match.group(1).strip()
        address = match.group(2).strip()
        return (name or address, address)

    address = header_value.strip()
    return (address, address)


class _VisibleTextParser(HTMLParser):
    """Collects visible text, turning block elements into line breaks."""

    def __init__(self):
        super().__init__()
        self._chunks: list[str] = []
        self._hidden_depth = 0

    def handle_starttag(self, tag: str, attrs: list) -> None:
        tag = tag.lower()
        if tag in _HIDDEN_TAGS:
            self._hidden_depth += 1
        if tag in _BLOCK_TAGS:
            self._chunks.append("\n")

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() in _HIDDEN_TAGS and self._hidden_depth:
            self._hidden_depth -= 1

    def handle_data(self, data: str) -> None:
        if not self._hidden_depth:
            self._chunks.append(data)

    def get_text(self) -> str:
        text = "".join(self._chunks)
        text = re.sub(r"[ \t]+", " ", text)
        text = re.sub(r"\n\s*\n", "\n\n", text)
        return text.strip()


def html_to_plain_text(html: str) -> str:
    """Strip tags from HTML, keeping visible text and rough line structure."""
    parser = _VisibleTextParser()
    parser.feed(html)
    parser.close()
    return parser.get_text()
