"""Tests for the Gmail proxy adapters and raw message helpers."""

import base64

import pytest
from crew_tools import GetGmailMessageById, GmailSearch, GmailSend
from crew_tools.adapters.gmail import build_raw_message, encode_raw_message


def _decode(encoded: str) -> str:
    padded = encoded + "=" * (-len(encoded) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8")


class TestRawMessage:
    """Test cases for building and encoding raw messages."""

    def test_build_raw_message(self):
        """Test the exact RFC 2822 text."""
        raw = build_raw_message(to="b@x.com", subject="Hi", body="Hello", sender="a@x.com")

        assert raw == (
            "From: a@x.com\r\n"
            "To: b@x.com\r\n"
            'Content-Type: text/plain; charset="UTF-8"\r\n'
            "MIME-Version: 1.0\r\n"
            "Subject: Hi\r\n"
            "\r\n"
            "Hello"
        )

    def test_from_omitted_without_sender(self):
        """Test the From line is left out when there is no sender."""
        raw = build_raw_message(to="b@x.com", subject="Hi", body="Hello")

        assert raw.startswith("To: b@x.com\r\n")
        assert "From:" not in raw

    def test_header_line_breaks_rejected(self):
        """Test header injection through the subject is refused."""
        with pytest.raises(ValueError, match="Subject"):
            build_raw_message(to="b@x.com", subject="Hi\r\nBcc: evil@x.com", body="Hello")

    def test_encoding_is_url_safe(self):
        """Test + and / are replaced and padding is stripped."""
        assert encode_raw_message("???") == "Pz8_"
        assert encode_raw_message(">>>") == "Pj4-"
        assert encode_raw_message("a") == "YQ"

    def test_encoded_message_round_trips(self):
        """Test the encoded message decodes back and has no unsafe characters."""
        raw = build_raw_message(to="b@x.com", subject="Hi", body="Hello", sender="a@x.com")
        encoded = encode_raw_message(raw)

        assert "+" not in encoded
        assert "/" not in encoded
        assert not encoded.endswith("=")
        assert _decode(encoded) == raw

    def test_utf8_body(self):
        """Test non-ASCII bodies are encoded as UTF-8."""
        raw = build_raw_message(to="b@x.com", subject="Café", body="Grüße ✓")

        assert _decode(encode_raw_message(raw)) == raw


class TestGmailSearch:
    """Test cases for GmailSearch."""

    @pytest.mark.asyncio
    async def test_query_passed_verbatim(self, backend, proxy_config):
        """Test the Gmail query is forwarded untouched."""
        mock = backend(payload={"messages": [{"id": "m1", "threadId": "t1"}], "resultSizeEstimate": 1})
        search = GmailSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": "from:john@example.com is:unread after:2025/01/01"})

        assert mock.last.method == "GET"
        assert mock.last.url.path == "/service/google/gmail/search"
        assert mock.last.url.params["q"] == "from:john@example.com is:unread after:2025/01/01"
        assert result == {
            "success": True,
            "messages": [{"id": "m1", "threadId": "t1"}],
            "resultSizeEstimate": 1,
        }

    @pytest.mark.asyncio
    async def test_empty_result(self, backend, proxy_config):
        """Test missing fields default to empty values."""
        mock = backend(payload={})
        search = GmailSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": "label:nothing"})

        assert result == {"success": True, "messages": [], "resultSizeEstimate": 0}

    @pytest.mark.asyncio
    async def test_unauthorized(self, backend, proxy_config):
        """Test a 401 is returned as a failure."""
        mock = backend(status_code=401)
        search = GmailSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": "is:unread"})

        assert result == {"success": False, "error": "Gmail search failed: Unauthorized"}


class TestGmailSend:
    """Test cases for GmailSend."""

    @pytest.mark.asyncio
    async def test_send(self, backend, proxy_config):
        """Test the raw message is posted and the response mapped."""
        mock = backend(payload={"id": "msg-1", "threadId": "thr-1", "labelIds": ["SENT"]})
        send = GmailSend(proxy_config, transport=mock.transport)

        result = await send.invoke({"from": "a@x.com", "to": "b@x.com", "subject": "Hi", "body": "Hello"})

        assert mock.last.method == "POST"
        assert mock.last.url.path == "/service/google/gmail/send"
        assert mock.last.headers["Authorization"] == "Bearer test-access-token"
        expected = build_raw_message(to="b@x.com", subject="Hi", body="Hello", sender="a@x.com")
        assert _decode(mock.last_json()["raw"]) == expected
        assert result == {"success": True, "messageId": "msg-1", "threadId": "thr-1", "labelIds": ["SENT"]}

    @pytest.mark.asyncio
    async def test_invalid_header_returned_as_failure(self, backend, proxy_config):
        """Test a rejected header never reaches the proxy."""
        mock = backend()
        send = GmailSend(proxy_config, transport=mock.transport)

        result = await send.invoke({"to": "b@x.com\nBcc: c@x.com", "subject": "Hi", "body": "Hello"})

        assert result["success"] is False
        assert "To header" in result["error"]
        assert mock.requests == []

    @pytest.mark.asyncio
    async def test_send_failure(self, backend, proxy_config):
        """Test an error status is returned."""
        mock = backend(status_code=400)
        send = GmailSend(proxy_config, transport=mock.transport)

        result = await send.invoke({"to": "b@x.com", "subject": "Hi", "body": "Hello"})

        assert result == {"success": False, "error": "Failed to send email: Bad Request"}


class TestGetGmailMessageById:
    """Test cases for GetGmailMessageById."""

    @pytest.mark.asyncio
    async def test_get_message(self, backend, proxy_config):
        """Test a single message is fetched by id."""
        message = {"id": "m1", "snippet": "Hello", "labelIds": ["INBOX"]}
        mock = backend(payload=message)
        get_message = GetGmailMessageById(proxy_config, transport=mock.transport)

        result = await get_message.invoke({"messageId": "m1"})

        assert mock.last.url.path == "/service/google/gmail/messages/m1"
        assert result == {"success": True, "message": message}

    @pytest.mark.asyncio
    async def test_missing_message(self, backend, proxy_config):
        """Test a 404 is returned as a failure."""
        mock = backend(status_code=404)
        get_message = GetGmailMessageById(proxy_config, transport=mock.transport)

        result = await get_message.invoke({"messageId": "nope"})

        assert result == {"success": False, "error": "Failed to get Gmail message: Not Found"}
