"""
HTTP v1: routers, schemas and error mapping.
"""

from .router import build_router, router

__all__ = ["router", "build_router"]
