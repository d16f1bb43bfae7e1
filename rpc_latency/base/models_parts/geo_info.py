"""
GeoInfo DTO describing the observer's approximate network location.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...config.defaults import GEO_UNKNOWN_LOCATION


@dataclass(frozen=True)
class GeoInfo:
    """Best-effort location, ASN and ISP strings for the observer.

    Attributes:
        location: ``"city, region, country"`` or ``"Unknown Location"``;
            ``None`` until a lookup has been attempted.
        asn: Autonomous system label such as ``"AS13335"``.
        isp: Organisation name reported by the lookup service.
    """

    location: Optional[str] = None
    asn: Optional[str] = None
    isp: Optional[str] = None

    @classmethod
    def unknown(cls) -> "GeoInfo":
        return cls(location=GEO_UNKNOWN_LOCATION)

    def to_dict(self) -> Dict[str, Any]:
        return {"location": self.location, "asn": self.asn, "isp": self.isp}


__all__ = ["GeoInfo"]
