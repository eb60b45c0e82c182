from .health_controller import router

__all__ = [
    "router"
]
