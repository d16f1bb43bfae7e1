from .latency_service import LatencyService

__all__ = ["LatencyService"]
