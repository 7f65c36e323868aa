"""Tests for the Drive proxy adapters."""

import logging

import httpx
import pytest
from crew_tools import ConfigurationError, DriveSearch, GoogleServiceConfig, ListDriveFiles, SharedState
from crew_tools.adapters import GoogleProxyAdapter

FILES = [
    {
        "id": "f1",
        "name": "Budget 2025.xlsx",
        "mimeType": "application/vnd.google-apps.spreadsheet",
        "modifiedTime": "2025-01-02T10:00:00.000Z",
        "webViewLink": "https://docs.google.com/spreadsheets/d/f1/edit",
    },
]


class TestDriveSearch:
    """Test cases for DriveSearch."""

    @pytest.mark.asyncio
    async def test_search_success(self, backend, proxy_config):
        """Test a 2xx response is normalized with files and no page token."""
        mock = backend(payload={"files": FILES})
        search = DriveSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": "name contains 'budget'"})

        assert result == {"success": True, "files": FILES, "nextPageToken": None}

    @pytest.mark.asyncio
    async def test_search_request(self, backend, proxy_config):
        """Test the outgoing request shape."""
        mock = backend(payload={"files": []})
        search = DriveSearch(proxy_config, transport=mock.transport)

        await search.invoke({"query": "mimeType = 'application/pdf'"})

        request = mock.last
        assert request.method == "GET"
        assert request.url.path == "/service/google/drive/files"
        assert request.url.params["q"] == "mimeType = 'application/pdf'"
        assert request.url.params["fields"] == "files(id, name, mimeType, modifiedTime, size, webViewLink)"
        assert request.headers["Authorization"] == "Bearer test-access-token"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_page_token_passed_through(self, backend, proxy_config):
        """Test nextPageToken is surfaced as-is."""
        mock = backend(payload={"files": FILES, "nextPageToken": "tok-2"})
        search = DriveSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": ""})

        assert result["nextPageToken"] == "tok-2"

    @pytest.mark.asyncio
    async def test_non_2xx_returns_failure(self, backend, proxy_config):
        """Test an error status is returned, not raised."""
        mock = backend(status_code=404)
        search = DriveSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": "x"})

        assert result["success"] is False
        assert "Not Found" in result["error"]
        assert result["error"].startswith("Drive search failed")

    @pytest.mark.asyncio
    async def test_network_error_returns_failure(self, backend, proxy_config):
        """Test a transport exception becomes a failure result."""
        mock = backend(error=httpx.ConnectError("connection refused"))
        search = DriveSearch(proxy_config, transport=mock.transport)

        result = await search.invoke({"query": "x"})

        assert result == {"success": False, "error": "connection refused"}

    @pytest.mark.asyncio
    async def test_failure_not_logged_above_debug(self, backend, proxy_config, caplog):
        """Test a returned failure leaves reporting to the caller."""
        mock = backend(status_code=500)
        search = DriveSearch(proxy_config, transport=mock.transport)

        with caplog.at_level(logging.INFO):
            result = await search.invoke({"query": "x"})

        assert result["success"] is False
        assert [r for r in caplog.records if r.name.startswith("crew_tools")] == []

    def test_proxy_base_is_abstract(self, proxy_config):
        """Test the proxy base can't be used without a request hook."""
        with pytest.raises(TypeError):
            GoogleProxyAdapter(proxy_config)

    @pytest.mark.asyncio
    async def test_missing_credentials_raise(self, backend):
        """Test missing URL and token raise before any request."""
        mock = backend()
        search = DriveSearch(transport=mock.transport)

        with pytest.raises(ConfigurationError) as exc_info:
            await search.invoke({"query": "x"})

        assert exc_info.value.missing == ["google_service_api_url", "access_token"]
        assert "GOOGLE_SERVICE_API_URL" in str(exc_info.value)
        assert "GOOGLE_ACCESS_TOKEN" in str(exc_info.value)
        assert mock.requests == []

    @pytest.mark.asyncio
    async def test_credentials_from_state(self, backend):
        """Test URL and token can come from the crew state."""
        mock = backend(payload={"files": []})
        state = SharedState({"env": {
            "GOOGLE_SERVICE_API_URL": "http://state-proxy.test/",
            "GOOGLE_ACCESS_TOKEN": "state-token",
        }})
        search = DriveSearch(GoogleServiceConfig(), state=state, transport=mock.transport)

        result = await search.invoke({"query": "x"})

        assert result["success"] is True
        assert mock.last.url.host == "state-proxy.test"
        assert mock.last.url.path == "/service/google/drive/files"
        assert mock.last.headers["Authorization"] == "Bearer state-token"


class TestListDriveFiles:
    """Test cases for ListDriveFiles."""

    @pytest.mark.asyncio
    async def test_default_page_size(self, backend, proxy_config):
        """Test pageSize defaults to 25 and no query filter is sent."""
        mock = backend(payload={"files": FILES})
        list_files = ListDriveFiles(proxy_config, transport=mock.transport)

        result = await list_files.invoke({})

        params = mock.last.url.params
        assert params["pageSize"] == "25"
        assert params["fields"] == "files(id, name, mimeType, modifiedTime, webViewLink)"
        assert "q" not in params
        assert result["files"] == FILES

    @pytest.mark.asyncio
    async def test_explicit_page_size(self, backend, proxy_config):
        """Test an explicit pageSize is forwarded."""
        mock = backend(payload={"files": []})
        list_files = ListDriveFiles(proxy_config, transport=mock.transport)

        await list_files.invoke({"pageSize": "10"})

        assert mock.last.url.params["pageSize"] == "10"

    @pytest.mark.asyncio
    async def test_repeated_calls_are_identical(self, backend, proxy_config):
        """Test no hidden cursor advances between calls."""
        mock = backend(payload={"files": FILES, "nextPageToken": "tok"})
        list_files = ListDriveFiles(proxy_config, transport=mock.transport)

        first = await list_files.invoke({"pageSize": "5"})
        second = await list_files.invoke({"pageSize": "5"})

        assert first == second
        assert str(mock.requests[0].url) == str(mock.requests[1].url)

    @pytest.mark.asyncio
    async def test_failure(self, backend, proxy_config):
        """Test server errors are returned with the status text."""
        mock = backend(status_code=500)
        list_files = ListDriveFiles(proxy_config, transport=mock.transport)

        result = await list_files.invoke({})

        assert result == {"success": False, "error": "Failed to list Drive files: Internal Server Error"}

    def test_to_function(self, proxy_config):
        """Test the descriptor exposes name and schema."""
        descriptor = ListDriveFiles(proxy_config).to_function()

        assert descriptor.name == "ListDriveFiles"
        assert "pageSize" in descriptor.parameters.properties
        assert descriptor.parameters.required == []
