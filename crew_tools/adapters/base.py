"""Base Tool Adapter - Abstract interface for every crew tool.

All tool adapters implement this interface so an orchestrator can register
them by name and call them with schema-shaped arguments.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping
import logging

from ..types import AdapterFamily, ToolCategory, ToolDescriptor, ToolParameters, ToolVendor

logger = logging.getLogger(__name__)


class BaseToolAdapter(ABC):
    """
    Abstract base class for tool adapters.

    Adapters translate one agent function call into one vendor API call.

    Responsibilities:
    - Credential resolution
    - API request construction
    - Vendor-specific response handling

    Constraints:
    - No retries
    - No caching of credentials or responses
    - No writes to the shared crew state
    """

    name: str = "base"
    description: str = ""
    parameters: ToolParameters = ToolParameters()
    vendor: ToolVendor
    category: ToolCategory
    family: AdapterFamily

    @abstractmethod
    async def invoke(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Execute the tool.

        Args:
            args: Arguments matching ``parameters``

        Returns:
            Normalized result dictionary
        """
        pass

    def to_function(self) -> ToolDescriptor:
        """Build the descriptor an orchestrator registers."""
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
            invoke=self.invoke,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, family={self.family.value})"
