"""HTTP reply value returned by ``IHttpJsonClient`` implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class HttpReply:
    """Status code plus either a decoded JSON payload or a parse error.

    Attributes:
        status: HTTP status code.
        json: Decoded JSON body; ``None`` when the body was empty or invalid.
        parse_error: Decoder message when the body was not valid JSON.
    """

    status: int
    json: Any = None
    parse_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


__all__ = ["HttpReply"]
