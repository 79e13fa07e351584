"""HTTP API for the workflow simulator."""

from .endpoints import router

__all__ = ["router"]
