"""Crew tool types and data models.

This module defines all Pydantic models shared by the adapters:
- Adapter configuration (immutable per adapter instance)
- Tool descriptors handed to the orchestrator
- Normalized invocation results
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class ToolCategory(str, Enum):
    """Category classification for tools."""
    DATA = "data"
    COMMUNICATION = "communication"
    DOCUMENT = "document"


class ToolVendor(str, Enum):
    """Supported tool vendors."""
    GOOGLE = "google"
    WORDPRESS = "wordpress"


class AdapterFamily(str, Enum):
    """Transport family, which also fixes how failures propagate."""
    GOOGLE_PROXY = "google_proxy"    # failures returned as {success: False}
    GOOGLE_DIRECT = "google_direct"  # failures raised
    WORDPRESS = "wordpress"          # failures raised


class GoogleTransport(str, Enum):
    """Which Google adapter family a registry is built with."""
    PROXY = "proxy"
    DIRECT = "direct"


# =============================================================================
# Configuration Models
# =============================================================================

class GoogleServiceConfig(BaseModel):
    """Bearer-token access to the self-hosted google-service-api proxy."""
    model_config = ConfigDict(frozen=True)

    access_token: str = ""
    refresh_token: str = ""
    google_service_api_url: str = ""


class GoogleOAuth2Credentials(BaseModel):
    """OAuth2 app credentials used to mint an access token per call."""
    model_config = ConfigDict(frozen=True)

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    refresh_token: str = ""


class GoogleOAuth2Config(BaseModel):
    """Configuration for the direct Drive/Gmail adapters."""
    model_config = ConfigDict(frozen=True)

    credentials: GoogleOAuth2Credentials = Field(default_factory=GoogleOAuth2Credentials)


class WordPressCredentials(BaseModel):
    """WordPress site URL and application password."""
    model_config = ConfigDict(frozen=True)

    url: str = ""
    username: str = ""
    password: str = ""


class WordPressConfig(BaseModel):
    """Configuration for the WordPress adapter.

    ``verify_tls=False`` accepts self-signed certificates. It disables
    certificate checking entirely, so only turn it on for development sites.
    """
    model_config = ConfigDict(frozen=True)

    credentials: WordPressCredentials = Field(default_factory=WordPressCredentials)
    verify_tls: bool = True


# =============================================================================
# Tool Descriptor Models
# =============================================================================

class ToolParameters(BaseModel):
    """JSON Schema for tool arguments."""
    type: str = "object"
    properties: Dict[str, Any] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)


InvokeFunc = Callable[[Mapping[str, Any]], Awaitable[Dict[str, Any]]]


class ToolDescriptor(BaseModel):
    """What the orchestrator registers: name, schema and an async callable."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: ToolParameters
    invoke: InvokeFunc = Field(exclude=True)

    async def __call__(self, args: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.invoke(args or {})


# =============================================================================
# Result Models
# =============================================================================

class ToolResult(BaseModel):
    """Base for normalized results; serialized with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolFailure(ToolResult):
    """Returned (not raised) by the proxy family."""
    success: bool = False
    error: str


class DriveFilesResult(ToolResult):
    success: bool = True
    files: List[Dict[str, Any]] = Field(default_factory=list)
    next_page_token: Optional[str] = Field(default=None, alias="nextPageToken")


class GmailSearchResult(ToolResult):
    success: bool = True
    messages: List[Dict[str, Any]] = Field(default_factory=list)
    result_size_estimate: int = Field(default=0, alias="resultSizeEstimate")


class GmailSendResult(ToolResult):
    success: bool = True
    message_id: Optional[str] = Field(default=None, alias="messageId")
    thread_id: Optional[str] = Field(default=None, alias="threadId")
    label_ids: List[str] = Field(default_factory=list, alias="labelIds")


class GmailMessageResult(ToolResult):
    success: bool = True
    message: Dict[str, Any] = Field(default_factory=dict)


class SheetListResult(ToolResult):
    success: bool = True
    sheets: List[Any] = Field(default_factory=list)


class SheetDataResult(ToolResult):
    success: bool = True
    values: List[List[Any]] = Field(default_factory=list)
    range: Optional[str] = None


class WordPressPostResult(ToolResult):
    """WordPress results carry no success flag; failures raise."""
    id: int
    url: str
    status: str
