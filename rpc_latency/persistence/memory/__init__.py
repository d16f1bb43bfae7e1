from .in_memory_store import InMemoryKeyValueStore

__all__ = ["InMemoryKeyValueStore"]
