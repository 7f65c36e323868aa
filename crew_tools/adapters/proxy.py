"""Google proxy adapters - calls through the self-hosted google-service-api.

Every request goes to ``{google_service_api_url}/service/google/...`` with the
access token as a bearer token. Failures after credential resolution are
returned as ``{"success": False, "error": ...}`` instead of raised.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Mapping, Optional

import httpx

from .base import BaseToolAdapter
from ..credentials import CredentialField, resolve_credentials
from ..exceptions import TransportError
from ..state import SharedState
from ..types import AdapterFamily, GoogleServiceConfig, ToolFailure, ToolResult, ToolVendor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

PROXY_FIELDS = (
    CredentialField("google_service_api_url", "GOOGLE_SERVICE_API_URL"),
    CredentialField("access_token", "GOOGLE_ACCESS_TOKEN"),
)


class GoogleProxyAdapter(BaseToolAdapter):
    """
    Base class for adapters backed by the google-service-api proxy.

    Subclasses implement ``_call`` and set ``failure_message``, the prefix put
    in front of the HTTP status text when the proxy answers with an error.
    """

    vendor = ToolVendor.GOOGLE
    family = AdapterFamily.GOOGLE_PROXY
    failure_message: str = "Google service request failed"

    def __init__(
        self,
        config: Optional[GoogleServiceConfig] = None,
        state: Optional[SharedState] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.config = config or GoogleServiceConfig()
        self.state = state
        self._transport = transport
        self._timeout = timeout

    def _resolve_credentials(self) -> Dict[str, str]:
        return resolve_credentials(PROXY_FIELDS, self.config.model_dump(), self.state)

    def _headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        credentials: Dict[str, str],
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request to the proxy and return the decoded JSON body."""
        base_url = credentials["google_service_api_url"].rstrip("/")
        url = f"{base_url}/service/google/{path}"
        logger.debug(f"{self.name}: {method} {url}")

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(credentials["access_token"]),
            )

        if response.is_error:
            raise TransportError(
                f"{self.failure_message}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response.json()

    @abstractmethod
    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> ToolResult:
        """Make the proxy request(s) for one invocation."""
        pass

    async def invoke(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        """Run the tool; ConfigurationError propagates, everything else is returned."""
        credentials = self._resolve_credentials()

        try:
            result = await self._call(credentials, args)
        except TransportError as e:
            logger.debug(f"{self.name} failed with status {e.status_code}: {e}")
            return ToolFailure(error=str(e)).to_dict()
        except Exception as e:
            logger.debug(f"{self.name} failed: {e}")
            return ToolFailure(error=str(e) or type(e).__name__).to_dict()

        return result.to_dict()
