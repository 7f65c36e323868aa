"""Tool Adapters - Vendor-specific API implementations.

This package contains one adapter per agent-callable capability, grouped by
transport family:
- Google proxy: Drive, Gmail and Sheets through the google-service-api proxy
- Google direct: Drive and Gmail through google-api-python-client
- WordPress: REST API with HTTP Basic auth
"""

from .base import BaseToolAdapter
from .proxy import GoogleProxyAdapter
from .drive import DriveSearch, ListDriveFiles
from .gmail import GmailSearch, GmailSend, GetGmailMessageById, build_raw_message, encode_raw_message
from .sheets import ListSheets, GetData
from .google_direct import (
    GoogleDirectAdapter,
    GoogleServiceFactory,
    DirectDriveSearch,
    DirectListDriveFiles,
    DirectGmailSearch,
    DirectGmailSend,
    DirectGetGmailMessageById,
)
from .wordpress import WordPressPost

__all__ = [
    "BaseToolAdapter",
    # Google proxy
    "GoogleProxyAdapter",
    "DriveSearch",
    "ListDriveFiles",
    "GmailSearch",
    "GmailSend",
    "GetGmailMessageById",
    "ListSheets",
    "GetData",
    # Google direct
    "GoogleDirectAdapter",
    "GoogleServiceFactory",
    "DirectDriveSearch",
    "DirectListDriveFiles",
    "DirectGmailSearch",
    "DirectGmailSend",
    "DirectGetGmailMessageById",
    # WordPress
    "WordPressPost",
    # Helpers
    "build_raw_message",
    "encode_raw_message",
]
