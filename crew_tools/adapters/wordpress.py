"""WordPress post creation through the WordPress REST API.

Credentials come from ``WordPressConfig.credentials`` or, field by field,
from ``WORDPRESS_URL`` / ``WORDPRESS_USERNAME`` / ``WORDPRESS_PASSWORD`` in
the crew state. Failures are raised.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .base import BaseToolAdapter
from ..credentials import CredentialField, resolve_credentials
from ..exceptions import TransportError
from ..state import SharedState
from ..types import (
    AdapterFamily,
    ToolCategory,
    ToolParameters,
    ToolVendor,
    WordPressConfig,
    WordPressPostResult,
)

logger = logging.getLogger(__name__)

POST_STATUSES = ("draft", "publish")
DEFAULT_TIMEOUT_SECONDS = 30.0

WORDPRESS_FIELDS = (
    CredentialField("url", "WORDPRESS_URL"),
    CredentialField("username", "WORDPRESS_USERNAME"),
    CredentialField("password", "WORDPRESS_PASSWORD"),
)


class WordPressPost(BaseToolAdapter):
    """
    Create a post on a WordPress site.

    ``content`` is sent as-is and may contain HTML; sanitizing it is up to
    the caller.

    Example:
        post = WordPressPost(WordPressConfig(credentials=WordPressCredentials(
            url="https://blog.example.com",
            username="editor",
            password="abcd efgh ijkl mnop",
        )))
        await post.invoke({"title": "Hello", "content": "<p>Hi!</p>"})
        # {"id": 123, "url": "https://blog.example.com/hello", "status": "draft"}
    """

    name = "PostToWordPress"
    description = "Creates a new post on WordPress with the given title and content"
    parameters = ToolParameters(
        properties={
            "title": {"type": "string", "description": "The title of the WordPress post"},
            "content": {
                "type": "string",
                "description": "The content of the WordPress post (can include HTML)",
            },
            "status": {
                "type": "string",
                "enum": list(POST_STATUSES),
                "description": "Whether to publish the post immediately or save as draft",
            },
        },
        required=["title", "content"],
    )
    vendor = ToolVendor.WORDPRESS
    category = ToolCategory.DOCUMENT
    family = AdapterFamily.WORDPRESS

    def __init__(
        self,
        config: Optional[WordPressConfig] = None,
        state: Optional[SharedState] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.config = config or WordPressConfig()
        self.state = state
        self._transport = transport
        self._timeout = timeout

    async def invoke(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        credentials = resolve_credentials(
            WORDPRESS_FIELDS,
            self.config.credentials.model_dump(),
            self.state,
        )

        status = args.get("status") or "draft"
        if status not in POST_STATUSES:
            raise ValueError(f"Invalid post status '{status}', expected one of {', '.join(POST_STATUSES)}")

        if not self.config.verify_tls:
            logger.warning(f"TLS certificate verification is disabled for {credentials['url']}")

        url = f"{credentials['url'].rstrip('/')}/wp-json/wp/v2/posts"
        body = {"title": args["title"], "content": args["content"], "status": status}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                verify=self.config.verify_tls,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=body,
                    auth=(credentials["username"], credentials["password"]),
                )
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to post to WordPress: {e}") from e

        if response.is_error:
            raise TransportError(
                f"Failed to post to WordPress: WordPress API error: {response.text}",
                status_code=response.status_code,
            )

        try:
            post = response.json()
            result = WordPressPostResult(id=post["id"], url=post["link"], status=post["status"])
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(
                f"Failed to post to WordPress: unexpected response: {e}",
                status_code=response.status_code,
            ) from e

        logger.debug(f"Created WordPress post {result.id} ({result.status})")
        return result.to_dict()
