"""Test doubles shared across the latency engine suites.

Deterministic collaborators so engine behaviour can be asserted without
network access or real time:

- ``FakeClock``: settable epoch-millisecond clock
- ``ScriptedHttpClient``: ``IHttpJsonClient`` double replaying queued replies
- ``RecordingSleeper``: records requested pauses instead of sleeping
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Mapping, Tuple, Union

from rpc_latency.base.http import HttpReply

START_MS = 1_700_000_000_000

Scripted = Union[HttpReply, BaseException, Callable[[], HttpReply]]


@dataclass
class FakeClock:
    now: int = START_MS

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@dataclass
class FakeMonotonic:
    """Monotonic clock (seconds) advanced by the scripted HTTP client."""

    value: float = 100.0

    def __call__(self) -> float:
        return self.value


@dataclass
class ScriptedHttpClient:
    """Replays per-URL scripted replies; records every call.

    A script entry may be an ``HttpReply``, an exception instance to raise, or
    a zero-argument callable producing a reply (used to run side effects
    mid-probe). ``elapsed_ms`` advances the shared monotonic clock per POST.
    """

    monotonic: FakeMonotonic = field(default_factory=FakeMonotonic)
    scripts: Dict[str, Deque[Tuple[Scripted, int]]] = field(default_factory=dict)
    calls: List[Tuple[str, str, Any, int]] = field(default_factory=list)
    geo_reply: Scripted = field(default_factory=lambda: HttpReply(status=200, json={}))

    def script(self, url: str, reply: Scripted, elapsed_ms: int = 0) -> "ScriptedHttpClient":
        self.scripts.setdefault(url, deque()).append((reply, elapsed_ms))
        return self

    def _resolve(self, reply: Scripted) -> HttpReply:
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply()
        return reply

    def post_json(self, url: str, body: Mapping[str, Any], timeout_ms: int) -> HttpReply:
        self.calls.append(("POST", url, dict(body), timeout_ms))
        queue = self.scripts.get(url)
        if not queue:
            raise AssertionError(f"unexpected probe of {url}")
        reply, elapsed_ms = queue.popleft()
        self.monotonic.value += elapsed_ms / 1000.0
        return self._resolve(reply)

    def get_json(self, url: str, timeout_ms: int) -> HttpReply:
        self.calls.append(("GET", url, None, timeout_ms))
        return self._resolve(self.geo_reply)

    def posts(self) -> List[str]:
        return [url for method, url, _, _ in self.calls if method == "POST"]


@dataclass
class RecordingSleeper:
    pauses: List[float] = field(default_factory=list)

    def __call__(self, seconds: float) -> None:
        self.pauses.append(seconds)


def rpc_ok(block: str = "0x10") -> HttpReply:
    return HttpReply(status=200, json={"jsonrpc": "2.0", "id": 1, "result": block})


