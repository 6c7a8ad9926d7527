"""API utilities."""

from .response_policy import ResponsePolicy, map_error_to_status

__all__ = ["ResponsePolicy", "map_error_to_status"]
