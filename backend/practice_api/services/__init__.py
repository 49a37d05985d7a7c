"""
Application services.
"""

from .serialization import serialize_entity, serialize_result

__all__ = ["serialize_entity", "serialize_result"]
