# Routers package
from .api import register_api_routes

__all__ = ["register_api_routes"]
