"""
Common utilities shared across routers.
"""

from .crud import build_crud_router, parse_filter

__all__ = [
    "build_crud_router",
    "parse_filter",
]
