"""Model parts package: one value type per module."""

from .endpoint import Endpoint
from .geo_info import GeoInfo
from .probe_outcome import ProbeOutcome

__all__ = ["Endpoint", "GeoInfo", "ProbeOutcome"]
