"""Key-value stores the undo/redo engine reads from and writes to.

The engine only depends on the :class:`StateProvider` contract. Simple
mapping-shaped stores can be wrapped with :class:`MappingStateProvider`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, MutableMapping, Optional, Type, TypeVar

T = TypeVar("T")


class StateProvider(ABC):
    """Abstract key-value store.

    Every call is expected to be visible to the next one; no ordering or
    transactional guarantee is assumed beyond that.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default`` if unset."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``; removing an unset key is a no-op."""

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over the keys currently present."""

    def get_typed(self, key: str, expected_type: Type[T]) -> Optional[T]:
        """Return the value under ``key`` if it is an ``expected_type``, else None."""
        value = self.get(key)
        if isinstance(value, expected_type):
            return value
        return None

    def get_all(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Read several keys at once.

        Args:
            keys: Keys to read

        Returns:
            Mapping restricted to the requested keys that are currently present
        """
        present = set(self.keys())
        return {key: self.get(key) for key in keys if key in present}

    def __contains__(self, key: object) -> bool:
        return key in set(self.keys())


class MappingStateProvider(StateProvider):
    """Adapts any mutable mapping to the provider contract."""

    def __init__(self, mapping: MutableMapping[str, Any]):
        self._mapping = mapping

    def get(self, key: str, default: Any = None) -> Any:
        return self._mapping.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._mapping[key] = value

    def remove(self, key: str) -> None:
        self._mapping.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._mapping.keys()))

    def get_all(self, keys: Iterable[str]) -> Dict[str, Any]:
        return {key: self._mapping[key] for key in keys if key in self._mapping}

    def __contains__(self, key: object) -> bool:
        return key in self._mapping


class DictStateProvider(MappingStateProvider):
    """In-memory store backed by a private dict."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__(dict(initial or {}))

    @property
    def state(self) -> Dict[str, Any]:
        """Copy of the current contents."""
        return dict(self._mapping)
