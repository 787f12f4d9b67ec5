"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import health, split

__all__ = ["health", "split"]
