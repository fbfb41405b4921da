"""Factories for Lambda request handlers."""

from .avatar_handler import create_avatar_handler
from .health_handler import create_health_handler

__all__ = [
    "create_avatar_handler",
    "create_health_handler",
]
