"""IKeyValueStore Protocol (single-class module).

String key/value storage with a per-key change-notification channel.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

ChangeCallback = Callable[[str, str], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class IKeyValueStore(Protocol):
    """Minimal persistent string store used for snapshots and passive data."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - interface
        """Return the stored value for ``key`` or ``None`` when absent."""
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - interface
        """Create or replace the value stored under ``key``."""
        ...

    def subscribe(self, key: str, callback: ChangeCallback) -> Unsubscribe:  # pragma: no cover - interface
        """Register ``callback(key, new_value)`` for changes to ``key``.

        Returns
        -------
        Callable[[], None]
            Idempotent function removing the subscription.
        """
        ...


__all__ = ["IKeyValueStore", "ChangeCallback", "Unsubscribe"]
