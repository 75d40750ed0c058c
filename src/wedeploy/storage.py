"""
Key-value storage used to persist the signed-in user between helper
instances.

The SDK only needs `get`, `set` and `remove` with string keys; any object
implementing [`StorageProtocol`][wedeploy.storage.StorageProtocol] can be
handed to the [`AuthApiHelper`][wedeploy.handlers.AuthApiHelper].
"""

from threading import Lock
from typing import Any, Dict, Optional, Protocol


class StorageProtocol(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage; the default when no storage is provided."""

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)
