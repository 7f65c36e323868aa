"""Credential resolution for tool adapters.

Each required field is looked up in an ordered list of sources; the first
non-empty value wins. Resolution runs on every invocation and nothing is
cached. When any field is still missing after all sources were tried, a single
ConfigurationError lists every missing field together with the config
attribute and shared-state key it could have come from.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .exceptions import ConfigurationError
from .state import SharedState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredentialField:
    """A required secret: its config attribute and its shared-state key."""
    name: str
    env_key: str


class CredentialSource(ABC):
    """Base class for a named place credentials can come from."""

    name: str = "source"

    @abstractmethod
    def lookup(self, field: CredentialField) -> Optional[str]:
        """Return the non-empty value for ``field``, or None."""
        pass

    def describe(self, field: CredentialField) -> str:
        return self.name


class ConfigSource(CredentialSource):
    """Explicit values given to the adapter at construction."""

    name = "config"

    def __init__(self, values: Mapping[str, Any]):
        self._values = values

    def lookup(self, field: CredentialField) -> Optional[str]:
        return self._values.get(field.name) or None

    def describe(self, field: CredentialField) -> str:
        return f"config '{field.name}'"


class StateSource(CredentialSource):
    """The ``env`` map of the orchestrator's shared state."""

    name = "shared state env"

    def __init__(self, state: Optional[SharedState]):
        self._state = state

    def lookup(self, field: CredentialField) -> Optional[str]:
        if self._state is None:
            return None
        return self._state.env().get(field.env_key) or None

    def describe(self, field: CredentialField) -> str:
        return f"shared state '{field.env_key}'"


class CredentialResolver:
    """Resolve a fixed set of fields against ordered sources."""

    def __init__(self, fields: Sequence[CredentialField], sources: Sequence[CredentialSource]):
        self.fields = list(fields)
        self.sources = list(sources)

    def resolve(self) -> Dict[str, str]:
        """
        Return ``{field.name: value}`` for every field.

        Raises:
            ConfigurationError: If any field has no value in any source
        """
        resolved: Dict[str, str] = {}
        missing: List[CredentialField] = []

        for field in self.fields:
            for source in self.sources:
                value = source.lookup(field)
                if value:
                    resolved[field.name] = value
                    logger.debug(f"Resolved '{field.name}' from {source.name}")
                    break
            else:
                missing.append(field)

        if missing:
            details = [
                f"{f.name} ({' or '.join(s.describe(f) for s in self.sources)})"
                for f in missing
            ]
            raise ConfigurationError(
                missing=[f.name for f in missing],
                sources=[s.name for s in self.sources],
                details=details,
            )

        return resolved


def resolve_credentials(
    fields: Sequence[CredentialField],
    config_values: Mapping[str, Any],
    state: Optional[SharedState] = None,
) -> Dict[str, str]:
    """Resolve with the standard policy: explicit config first, then shared state."""
    resolver = CredentialResolver(fields, [ConfigSource(config_values), StateSource(state)])
    return resolver.resolve()
