"""Read-only access to the orchestrator-owned crew state."""

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

StateBag = Union[Mapping[str, Any], Callable[[], Mapping[str, Any]]]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class SharedState:
    """
    Non-owning, read-only view over a crew state bag.

    The backing mapping (or a callable returning it) stays owned by the
    orchestrator. It is re-read on every access, so values set after an
    adapter was constructed are still picked up.

    Usage:
        bag = {"env": {"WORDPRESS_URL": "https://blog.example.com"}}
        state = SharedState(bag)
        state.env()["WORDPRESS_URL"]
    """

    def __init__(self, source: Optional[StateBag] = None):
        self._source = source

    def _snapshot(self) -> Mapping[str, Any]:
        if self._source is None:
            return _EMPTY
        if callable(self._source):
            return self._source() or _EMPTY
        return self._source

    def get(self, key: str, default: Any = None) -> Any:
        """Return a top-level state value."""
        return self._snapshot().get(key, default)

    def env(self) -> Mapping[str, Any]:
        """Return the ``env`` credential map, or an empty mapping."""
        env = self.get("env")
        if not isinstance(env, Mapping):
            return _EMPTY
        return MappingProxyType(dict(env))

    def __repr__(self) -> str:
        # Never print values, they are secrets.
        return f"SharedState(keys={sorted(self._snapshot().keys())})"
