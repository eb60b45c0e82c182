from .health_response import HealthResponse

__all__ = [
    "HealthResponse"
]
