"""Key-value store adapters implementing ``IKeyValueStore``.

- ``memory``: process-local store; notifies subscribers when a value changes.
- ``sqlite``: durable store shared across connections/processes; changes
  made elsewhere are detected by :meth:`SqliteKeyValueStore.poll_changes`.
"""

from .memory import InMemoryKeyValueStore
from .sqlite import SqliteKeyValueStore

__all__ = ["InMemoryKeyValueStore", "SqliteKeyValueStore"]
