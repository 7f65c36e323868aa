"""Crew Tools - agent-callable adapters for Google Workspace and WordPress.

This package provides:
- Tool Adapters: one per capability (Drive, Gmail, Sheets, WordPress)
- Credential Resolver: explicit config first, then the crew state env
- Tool Registry: name -> adapter catalog with argument validation
"""

from .types import (
    # Enums
    ToolCategory,
    ToolVendor,
    AdapterFamily,
    GoogleTransport,
    # Configuration
    GoogleServiceConfig,
    GoogleOAuth2Credentials,
    GoogleOAuth2Config,
    WordPressCredentials,
    WordPressConfig,
    # Descriptors
    ToolParameters,
    ToolDescriptor,
    # Results
    ToolResult,
    ToolFailure,
    DriveFilesResult,
    GmailSearchResult,
    GmailSendResult,
    GmailMessageResult,
    SheetListResult,
    SheetDataResult,
    WordPressPostResult,
)

from .exceptions import ToolError, ConfigurationError, TransportError, VendorAPIError
from .state import SharedState
from .credentials import CredentialField, CredentialResolver, resolve_credentials
from .config import Settings, get_settings

from .adapters import (
    BaseToolAdapter,
    DriveSearch,
    ListDriveFiles,
    GmailSearch,
    GmailSend,
    GetGmailMessageById,
    ListSheets,
    GetData,
    GoogleServiceFactory,
    DirectDriveSearch,
    DirectListDriveFiles,
    DirectGmailSearch,
    DirectGmailSend,
    DirectGetGmailMessageById,
    WordPressPost,
)

from .tool_registry import ToolRegistry, build_registry

__all__ = [
    # Enums
    "ToolCategory",
    "ToolVendor",
    "AdapterFamily",
    "GoogleTransport",
    # Configuration
    "GoogleServiceConfig",
    "GoogleOAuth2Credentials",
    "GoogleOAuth2Config",
    "WordPressCredentials",
    "WordPressConfig",
    "Settings",
    "get_settings",
    # Descriptors
    "ToolParameters",
    "ToolDescriptor",
    # Results
    "ToolResult",
    "ToolFailure",
    "DriveFilesResult",
    "GmailSearchResult",
    "GmailSendResult",
    "GmailMessageResult",
    "SheetListResult",
    "SheetDataResult",
    "WordPressPostResult",
    # Errors
    "ToolError",
    "ConfigurationError",
    "TransportError",
    "VendorAPIError",
    # Credentials
    "SharedState",
    "CredentialField",
    "CredentialResolver",
    "resolve_credentials",
    # Adapters
    "BaseToolAdapter",
    "DriveSearch",
    "ListDriveFiles",
    "GmailSearch",
    "GmailSend",
    "GetGmailMessageById",
    "ListSheets",
    "GetData",
    "GoogleServiceFactory",
    "DirectDriveSearch",
    "DirectListDriveFiles",
    "DirectGmailSearch",
    "DirectGmailSend",
    "DirectGetGmailMessageById",
    "WordPressPost",
    # Core Components
    "ToolRegistry",
    "build_registry",
]
