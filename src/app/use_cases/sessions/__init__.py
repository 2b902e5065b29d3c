"""
Session Management Use Cases
"""

from .manage_sessions_use_case import ManageSessionsUseCase
from .dtos import SessionView

__all__ = [
    "ManageSessionsUseCase",
    "SessionView",
]
