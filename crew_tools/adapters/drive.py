"""Google Drive tools over the google-service-api proxy."""

import logging
from typing import Any, Dict, Mapping

from .proxy import GoogleProxyAdapter
from ..types import DriveFilesResult, ToolCategory, ToolParameters

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "files(id, name, mimeType, modifiedTime, size, webViewLink)"
LIST_FIELDS = "files(id, name, mimeType, modifiedTime, webViewLink)"
DEFAULT_PAGE_SIZE = "25"

DRIVE_SEARCH_DESCRIPTION = (
    "Search Google Drive files using Drive query syntax. For example, "
    "\"name contains 'budget'\" or \"mimeType = 'application/pdf'\" or "
    "\"modifiedTime > '2024-01-01'\"."
)
DRIVE_SEARCH_PARAMETERS = ToolParameters(
    properties={"query": {"type": "string", "description": "Drive search query"}},
    required=["query"],
)

LIST_DRIVE_FILES_DESCRIPTION = (
    "List files in Google Drive with optional pagination and sorting. "
    "Returns most recently modified files by default."
)
LIST_DRIVE_FILES_PARAMETERS = ToolParameters(
    properties={
        "pageSize": {
            "type": "string",
            "description": "Number of files to return per page (max: 25)",
        },
    },
)


def files_result(data: Mapping[str, Any]) -> DriveFilesResult:
    """Normalize a Drive files.list payload; nextPageToken is passed through."""
    return DriveFilesResult(
        files=data.get("files") or [],
        next_page_token=data.get("nextPageToken"),
    )


class DriveSearch(GoogleProxyAdapter):
    """
    Search Drive files with a Drive ``q`` expression.

    Example:
        search = DriveSearch(GoogleServiceConfig(
            access_token="ya29...",
            google_service_api_url="http://localhost:8080",
        ))
        result = await search.invoke({"query": "name contains 'budget'"})
    """

    name = "DriveSearch"
    description = DRIVE_SEARCH_DESCRIPTION
    parameters = DRIVE_SEARCH_PARAMETERS
    category = ToolCategory.DATA
    failure_message = "Drive search failed"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> DriveFilesResult:
        data = await self._request(
            credentials,
            "GET",
            "drive/files",
            params={"q": args["query"], "fields": SEARCH_FIELDS},
        )
        result = files_result(data)
        logger.debug(f"DriveSearch returned {len(result.files)} files")
        return result


class ListDriveFiles(GoogleProxyAdapter):
    """List Drive files in the proxy's default order."""

    name = "ListDriveFiles"
    description = LIST_DRIVE_FILES_DESCRIPTION
    parameters = LIST_DRIVE_FILES_PARAMETERS
    category = ToolCategory.DATA
    failure_message = "Failed to list Drive files"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> DriveFilesResult:
        page_size = args.get("pageSize") or DEFAULT_PAGE_SIZE
        data = await self._request(
            credentials,
            "GET",
            "drive/files",
            params={"fields": LIST_FIELDS, "pageSize": str(page_size)},
        )
        return files_result(data)
