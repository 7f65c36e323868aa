"""Tool Registry - Catalog of the adapters a crew can call.

The registry maps tool names to adapter instances. An orchestrator lists the
descriptors to show the model what it may call, then routes calls back
through ``invoke``. Tools not in the registry cannot be executed.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .adapters import (
    BaseToolAdapter,
    DirectDriveSearch,
    DirectGetGmailMessageById,
    DirectGmailSearch,
    DirectGmailSend,
    DirectListDriveFiles,
    DriveSearch,
    GetData,
    GetGmailMessageById,
    GmailSearch,
    GmailSend,
    ListDriveFiles,
    ListSheets,
    WordPressPost,
)
from .config import Settings, get_settings
from .state import SharedState
from .types import (
    GoogleOAuth2Config,
    GoogleServiceConfig,
    GoogleTransport,
    ToolCategory,
    ToolDescriptor,
    ToolVendor,
    WordPressConfig,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Catalog of adapters available to an agent crew.

    Responsibilities:
    - Hold one adapter per tool name
    - Produce descriptors for the orchestrator
    - Validate arguments against each tool's parameter schema
    """

    def __init__(self):
        self._adapters: Dict[str, BaseToolAdapter] = {}

    def register(self, adapter: BaseToolAdapter) -> None:
        """
        Register an adapter under its tool name.

        Raises:
            ValueError: If a tool with the same name already exists
        """
        if adapter.name in self._adapters:
            raise ValueError(f"Tool '{adapter.name}' is already registered")

        self._adapters[adapter.name] = adapter
        logger.info(f"Registered tool: {adapter.name} (family: {adapter.family.value})")

    def unregister(self, tool_name: str) -> None:
        """
        Remove a tool from the registry.

        Raises:
            KeyError: If tool doesn't exist
        """
        if tool_name not in self._adapters:
            raise KeyError(f"Tool '{tool_name}' not found in registry")

        del self._adapters[tool_name]
        logger.info(f"Unregistered tool: {tool_name}")

    def get(self, tool_name: str) -> Optional[BaseToolAdapter]:
        """Get an adapter by tool name, or None."""
        return self._adapters.get(tool_name)

    def list_tools(
        self,
        category: Optional[ToolCategory] = None,
        vendor: Optional[ToolVendor] = None,
    ) -> List[BaseToolAdapter]:
        """List adapters, optionally filtered by category and vendor."""
        adapters = list(self._adapters.values())

        if category:
            adapters = [a for a in adapters if a.category == category]
        if vendor:
            adapters = [a for a in adapters if a.vendor == vendor]

        return adapters

    def to_functions(self, **filters: Any) -> List[ToolDescriptor]:
        """Descriptors for every (filtered) tool."""
        return [adapter.to_function() for adapter in self.list_tools(**filters)]

    def validate_tool_exists(self, tool_name: str) -> bool:
        return tool_name in self._adapters

    @property
    def tool_count(self) -> int:
        return len(self._adapters)

    def validate_inputs(self, tool_name: str, inputs: Mapping[str, Any]) -> tuple[bool, Optional[str]]:
        """
        Validate arguments against a tool's parameter schema.

        Args:
            tool_name: Name of the tool
            inputs: Argument dictionary to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        adapter = self._adapters.get(tool_name)
        if not adapter:
            return False, f"Tool '{tool_name}' not found"

        schema = adapter.parameters

        for required_field in schema.required:
            if required_field not in inputs:
                return False, f"Missing required field: {required_field}"

        for field, value in inputs.items():
            spec = schema.properties.get(field)
            if not spec:
                continue
            expected_type = spec.get("type")
            if expected_type and not self._check_type(value, expected_type):
                return False, f"Field '{field}' has invalid type, expected {expected_type}"
            allowed = spec.get("enum")
            if allowed and value not in allowed:
                return False, f"Field '{field}' must be one of: {', '.join(allowed)}"

        return True, None

    def _check_type(self, value: Any, expected_type: str) -> bool:
        """Check if value matches expected JSON Schema type."""
        type_map = {
            "string": str,
            "integer": int,
            "number": (int, float),
            "boolean": bool,
            "array": list,
            "object": dict,
        }
        expected_python_type = type_map.get(expected_type)
        if expected_python_type:
            return isinstance(value, expected_python_type)
        return True  # Unknown types pass through

    async def invoke(self, tool_name: str, args: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Validate arguments and run a tool.

        Raises:
            KeyError: If the tool is not registered
            ValueError: If the arguments don't match the schema
        """
        adapter = self._adapters.get(tool_name)
        if not adapter:
            raise KeyError(f"Tool '{tool_name}' not found in registry")

        args = dict(args or {})
        valid, error = self.validate_inputs(tool_name, args)
        if not valid:
            raise ValueError(error)

        return await adapter.invoke(args)


def build_registry(
    settings: Optional[Settings] = None,
    *,
    state: Optional[SharedState] = None,
    google_config: Optional[GoogleServiceConfig] = None,
    drive_oauth: Optional[GoogleOAuth2Config] = None,
    gmail_oauth: Optional[GoogleOAuth2Config] = None,
    wordpress_config: Optional[WordPressConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ToolRegistry:
    """
    Build a registry with every tool for the configured Google transport.

    Drive and Gmail come from the proxy or the direct family depending on
    ``settings.google_transport``; Sheets is always proxied. WordPress is
    always registered. Credentials not given explicitly are read from
    ``state`` at call time (defaults to ``settings.to_state()``).
    """
    settings = settings or get_settings()
    if state is None:
        state = settings.to_state()
    timeout = settings.http_timeout_seconds

    def proxied(adapter_cls):
        return adapter_cls(google_config, state=state, transport=transport, timeout=timeout)

    registry = ToolRegistry()

    if settings.google_transport == GoogleTransport.DIRECT:
        registry.register(DirectDriveSearch(drive_oauth, state=state))
        registry.register(DirectListDriveFiles(drive_oauth, state=state))
        registry.register(DirectGmailSearch(gmail_oauth, state=state))
        registry.register(DirectGmailSend(gmail_oauth, state=state))
        registry.register(DirectGetGmailMessageById(gmail_oauth, state=state))
    else:
        for adapter_cls in (DriveSearch, ListDriveFiles, GmailSearch, GmailSend, GetGmailMessageById):
            registry.register(proxied(adapter_cls))

    registry.register(proxied(ListSheets))
    registry.register(proxied(GetData))
    registry.register(WordPressPost(wordpress_config, state=state, transport=transport, timeout=timeout))

    logger.info(f"Tool registry built with {registry.tool_count} tools ({settings.google_transport.value} transport)")
    return registry
