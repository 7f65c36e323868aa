"""Gmail tools over the google-service-api proxy.

Also holds the raw-message helpers shared with the direct Gmail adapters.
"""

import base64
import logging
from urllib.parse import quote
from typing import Any, Dict, Mapping, Optional

from .proxy import GoogleProxyAdapter
from ..types import (
    GmailMessageResult,
    GmailSearchResult,
    GmailSendResult,
    ToolCategory,
    ToolParameters,
)

logger = logging.getLogger(__name__)


# ── Raw message helpers ───────────────────────────────────────────────────────

def build_raw_message(to: str, subject: str, body: str, sender: Optional[str] = None) -> str:
    """
    Build the RFC 2822 text of a plain-text email.

    Header lines are joined with CRLF; the From line is left out when no
    sender is given so Gmail fills in the authenticated account.

    Raises:
        ValueError: If a header value contains a line break
    """
    headers = {"From": sender, "To": to, "Subject": subject}
    for header, value in headers.items():
        if value and ("\r" in value or "\n" in value):
            raise ValueError(f"{header} header must not contain line breaks")

    lines = []
    if sender:
        lines.append(f"From: {sender}")
    lines += [
        f"To: {to}",
        'Content-Type: text/plain; charset="UTF-8"',
        "MIME-Version: 1.0",
        f"Subject: {subject}",
        "",
        body,
    ]
    return "\r\n".join(lines)


def encode_raw_message(raw: str) -> str:
    """URL-safe base64 of the UTF-8 message with the ``=`` padding stripped."""
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def raw_message_from_args(args: Mapping[str, Any]) -> str:
    return encode_raw_message(
        build_raw_message(
            to=args["to"],
            subject=args["subject"],
            body=args["body"],
            sender=args.get("from"),
        )
    )


# ── Tool metadata ─────────────────────────────────────────────────────────────

GMAIL_SEARCH_DESCRIPTION = (
    "Search google workspace emails using the Gmail search query format. "
    "For example, \"from:john@example.com\" or \"is:unread\" or \"label:inbox\" "
    "or \"after:2025/01/01\" or a combination of these."
)
GMAIL_SEARCH_PARAMETERS = ToolParameters(
    properties={"query": {"type": "string", "description": "Gmail search query"}},
    required=["query"],
)

GMAIL_SEND_DESCRIPTION = "Send an email using Gmail"
GMAIL_SEND_PARAMETERS = ToolParameters(
    properties={
        "from": {"type": "string", "description": "Email address of the sender"},
        "to": {"type": "string", "description": "Email address of the recipient"},
        "subject": {"type": "string", "description": "Subject of the email"},
        "body": {"type": "string", "description": "Body of the email"},
    },
    required=["to", "subject", "body"],
)

GET_GMAIL_MESSAGE_DESCRIPTION = "Get a single Gmail message by its ID"
GET_GMAIL_MESSAGE_PARAMETERS = ToolParameters(
    properties={"messageId": {"type": "string", "description": "ID of the Gmail message"}},
    required=["messageId"],
)


def search_result(data: Mapping[str, Any]) -> GmailSearchResult:
    return GmailSearchResult(
        messages=data.get("messages") or [],
        result_size_estimate=data.get("resultSizeEstimate") or 0,
    )


def send_result(data: Mapping[str, Any]) -> GmailSendResult:
    return GmailSendResult(
        message_id=data.get("id"),
        thread_id=data.get("threadId"),
        label_ids=data.get("labelIds") or [],
    )


# ── Proxy adapters ────────────────────────────────────────────────────────────

class GmailSearch(GoogleProxyAdapter):
    """
    Search messages with Gmail's query operators.

    The query is forwarded verbatim; operators such as ``from:``,
    ``is:unread`` or ``after:YYYY/MM/DD`` are interpreted by Gmail.
    """

    name = "GmailSearch"
    description = GMAIL_SEARCH_DESCRIPTION
    parameters = GMAIL_SEARCH_PARAMETERS
    category = ToolCategory.COMMUNICATION
    failure_message = "Gmail search failed"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> GmailSearchResult:
        data = await self._request(credentials, "GET", "gmail/search", params={"q": args["query"]})
        return search_result(data)


class GmailSend(GoogleProxyAdapter):
    """Send a plain-text email as a base64url raw message."""

    name = "GmailSend"
    description = GMAIL_SEND_DESCRIPTION
    parameters = GMAIL_SEND_PARAMETERS
    category = ToolCategory.COMMUNICATION
    failure_message = "Failed to send email"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> GmailSendResult:
        raw = raw_message_from_args(args)
        data = await self._request(credentials, "POST", "gmail/send", json={"raw": raw})
        result = send_result(data)
        logger.debug(f"GmailSend delivered message {result.message_id}")
        return result


class GetGmailMessageById(GoogleProxyAdapter):
    name = "GetGmailMessageById"
    description = GET_GMAIL_MESSAGE_DESCRIPTION
    parameters = GET_GMAIL_MESSAGE_PARAMETERS
    category = ToolCategory.COMMUNICATION
    failure_message = "Failed to get Gmail message"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> GmailMessageResult:
        message_id = quote(args["messageId"], safe="")
        data = await self._request(credentials, "GET", f"gmail/messages/{message_id}")
        return GmailMessageResult(message=data)
