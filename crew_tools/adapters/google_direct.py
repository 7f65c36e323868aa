"""Google Direct Adapters - Drive and Gmail through google-api-python-client.

These adapters talk to Google's APIs without the proxy. Every invocation
exchanges the configured refresh token for a fresh access token, builds the
service and runs one RPC in a worker thread. Vendor errors are raised as
VendorAPIError and network failures as TransportError; nothing is returned
as a failure dict.
"""

import asyncio
import logging
from abc import abstractmethod
from typing import Any, Dict, Mapping, Optional, Tuple

import httplib2
from google.auth.exceptions import RefreshError, TransportError as AuthTransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .base import BaseToolAdapter
from .drive import (
    DEFAULT_PAGE_SIZE,
    DRIVE_SEARCH_DESCRIPTION,
    DRIVE_SEARCH_PARAMETERS,
    LIST_DRIVE_FILES_DESCRIPTION,
    LIST_DRIVE_FILES_PARAMETERS,
    LIST_FIELDS,
    SEARCH_FIELDS,
    files_result,
)
from .gmail import (
    GET_GMAIL_MESSAGE_DESCRIPTION,
    GET_GMAIL_MESSAGE_PARAMETERS,
    GMAIL_SEARCH_DESCRIPTION,
    GMAIL_SEARCH_PARAMETERS,
    GMAIL_SEND_DESCRIPTION,
    GMAIL_SEND_PARAMETERS,
    raw_message_from_args,
    search_result,
    send_result,
)
from ..credentials import CredentialField, resolve_credentials
from ..exceptions import TransportError, VendorAPIError
from ..state import SharedState
from ..types import (
    AdapterFamily,
    GmailMessageResult,
    GoogleOAuth2Config,
    ToolCategory,
    ToolResult,
    ToolVendor,
)

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def oauth2_fields(prefix: str) -> Tuple[CredentialField, ...]:
    """The four OAuth2 app fields, looked up as ``{prefix}_CLIENT_ID`` etc."""
    return tuple(
        CredentialField(name, f"{prefix}_{name.upper()}")
        for name in ("client_id", "client_secret", "redirect_uri", "refresh_token")
    )


class GoogleServiceFactory:
    """
    Builds googleapiclient service objects from OAuth2 app credentials.

    Unlike a long-lived client, nothing is cached: each ``build`` call runs
    the refresh-token grant and constructs a new service.
    """

    def credentials(self, values: Mapping[str, str]) -> Credentials:
        creds = Credentials(
            token=None,
            refresh_token=values["refresh_token"],
            client_id=values["client_id"],
            client_secret=values["client_secret"],
            token_uri=GOOGLE_TOKEN_URI,
        )
        creds.refresh(Request())
        return creds

    def build(self, api_name: str, version: str, values: Mapping[str, str]) -> Any:
        """Refresh an access token and build the ``api_name`` service."""
        return build(api_name, version, credentials=self.credentials(values), cache_discovery=False)


class GoogleDirectAdapter(BaseToolAdapter):
    """Base class for adapters that call Google APIs directly."""

    vendor = ToolVendor.GOOGLE
    family = AdapterFamily.GOOGLE_DIRECT
    api_name: str
    api_version: str
    credential_prefix: str

    def __init__(
        self,
        config: Optional[GoogleOAuth2Config] = None,
        state: Optional[SharedState] = None,
        service_factory: Optional[GoogleServiceFactory] = None,
    ):
        self.config = config or GoogleOAuth2Config()
        self.state = state
        self.service_factory = service_factory or GoogleServiceFactory()

    def _resolve_credentials(self) -> Dict[str, str]:
        return resolve_credentials(
            oauth2_fields(self.credential_prefix),
            self.config.credentials.model_dump(),
            self.state,
        )

    def _execute(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> ToolResult:
        service = self.service_factory.build(self.api_name, self.api_version, credentials)
        return self._call(service, args)

    @abstractmethod
    def _call(self, service: Any, args: Mapping[str, Any]) -> ToolResult:
        """Run one blocking RPC against the built service."""
        pass

    async def invoke(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        credentials = self._resolve_credentials()
        logger.debug(f"{self.name}: calling {self.api_name} {self.api_version}")

        try:
            result = await asyncio.to_thread(self._execute, credentials, args)
        except HttpError as e:
            logger.debug(f"Google API error in {self.name}: {e}")
            raise VendorAPIError(
                f"Google API error ({e.resp.status}): {e.reason}",
                status_code=e.resp.status,
            ) from e
        except RefreshError as e:
            logger.debug(f"Token refresh failed in {self.name}: {e}")
            raise VendorAPIError(f"Google OAuth2 token refresh failed: {e}") from e
        except (AuthTransportError, httplib2.HttpLib2Error, OSError) as e:
            logger.debug(f"Network failure in {self.name}: {e}")
            raise TransportError(f"Could not reach Google APIs: {e}") from e

        return result.to_dict()


# =============================================================================
# Google Drive
# =============================================================================

class DriveAdapter(GoogleDirectAdapter):
    api_name = "drive"
    api_version = "v3"
    credential_prefix = "DRIVE"
    category = ToolCategory.DATA


class DirectDriveSearch(DriveAdapter):
    name = "DriveSearch"
    description = DRIVE_SEARCH_DESCRIPTION
    parameters = DRIVE_SEARCH_PARAMETERS

    def _call(self, service: Any, args: Mapping[str, Any]) -> ToolResult:
        data = service.files().list(
            q=args["query"],
            fields=f"nextPageToken, {SEARCH_FIELDS}",
        ).execute()
        return files_result(data)


class DirectListDriveFiles(DriveAdapter):
    """Most recently modified files first."""

    name = "ListDriveFiles"
    description = LIST_DRIVE_FILES_DESCRIPTION
    parameters = LIST_DRIVE_FILES_PARAMETERS

    def _call(self, service: Any, args: Mapping[str, Any]) -> ToolResult:
        page_size = int(args.get("pageSize") or DEFAULT_PAGE_SIZE)
        data = service.files().list(
            pageSize=page_size,
            orderBy="modifiedTime desc",
            fields=f"nextPageToken, {LIST_FIELDS}",
        ).execute()
        return files_result(data)


# =============================================================================
# Gmail
# =============================================================================

class GmailAdapter(GoogleDirectAdapter):
    api_name = "gmail"
    api_version = "v1"
    credential_prefix = "GMAIL"
    category = ToolCategory.COMMUNICATION


class DirectGmailSearch(GmailAdapter):
    name = "GmailSearch"
    description = GMAIL_SEARCH_DESCRIPTION
    parameters = GMAIL_SEARCH_PARAMETERS

    def _call(self, service: Any, args: Mapping[str, Any]) -> ToolResult:
        data = service.users().messages().list(userId="me", q=args["query"]).execute()
        return search_result(data)


class DirectGmailSend(GmailAdapter):
    name = "GmailSend"
    description = GMAIL_SEND_DESCRIPTION
    parameters = GMAIL_SEND_PARAMETERS

    def _call(self, service: Any, args: Mapping[str, Any]) -> ToolResult:
        raw = raw_message_from_args(args)
        data = service.users().messages().send(userId="me", body={"raw": raw}).execute()
        result = send_result(data)
        logger.debug(f"GmailSend delivered message {result.message_id}")
        return result


class DirectGetGmailMessageById(GmailAdapter):
    name = "GetGmailMessageById"
    description = GET_GMAIL_MESSAGE_DESCRIPTION
    parameters = GET_GMAIL_MESSAGE_PARAMETERS

    def _call(self, service: Any, args: Mapping[str, Any]) -> ToolResult:
        data = service.users().messages().get(
            userId="me",
            id=args["messageId"],
            format="full",
        ).execute()
        return GmailMessageResult(message=data)
