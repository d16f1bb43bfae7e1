"""Best-effort observer geolocation.

Queries an ipapi-compatible JSON endpoint once per run. The lookup never
raises: any transport failure, non-2xx status or undecodable body degrades to
``GeoInfo(location="Unknown Location", asn=None, isp=None)``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..base.interfaces import IHttpJsonClient
from ..base.logging import get_logger, log_event
from ..base.models import GeoInfo
from ..base.timeouts import get_timeout_config
from ..config.defaults import GEO_LOOKUP_URL, GEO_UNKNOWN_LOCATION

logger = get_logger(__name__)


def geo_from_payload(payload: Mapping[str, Any]) -> GeoInfo:
    """Build :class:`GeoInfo` from an ipapi-style JSON object.

    ``location`` is ``"city, region, country"`` only when all three are
    present. ``asn`` is normalized to a single ``AS`` prefix (ipapi already
    returns ``"AS13335"``; numeric ASNs get the prefix added).
    """
    city, region, country = payload.get("city"), payload.get("region"), payload.get("country")
    location = f"{city}, {region}, {country}" if city and region and country else GEO_UNKNOWN_LOCATION
    raw_asn = payload.get("asn")
    asn: Optional[str] = None
    if raw_asn:
        text = str(raw_asn)
        asn = text if text.upper().startswith("AS") else f"AS{text}"
    return GeoInfo(location=location, asn=asn, isp=payload.get("org") or None)


class GeoLocator:
    def __init__(self, http: IHttpJsonClient, url: str = GEO_LOOKUP_URL, timeout_ms: Optional[int] = None) -> None:
        self._http = http
        self.url = url
        self._timeout_ms = timeout_ms

    def lookup(self) -> GeoInfo:
        timeout_ms = self._timeout_ms if self._timeout_ms is not None else get_timeout_config().geo_timeout_ms
        try:
            reply = self._http.get_json(self.url, timeout_ms)
        except Exception as exc:  # best effort; never fails the caller
            log_event(logger, "geo.failure", level=logging.WARNING, url=self.url, error=str(exc))
            return GeoInfo.unknown()
        if not reply.ok or not isinstance(reply.json, Mapping):
            log_event(
                logger,
                "geo.failure",
                level=logging.WARNING,
                url=self.url,
                status=reply.status,
                error=reply.parse_error,
            )
            return GeoInfo.unknown()
        return geo_from_payload(reply.json)


__all__ = ["GeoLocator", "geo_from_payload"]
