"""Exceptions raised by the booking client."""
from typing import Optional


class MediBookError(Exception):
    """Base class for booking view errors."""
    pass


class TransportError(MediBookError):
    """Raised when the backend cannot be reached or answers garbage."""

    def __init__(self, message: str, server_message: Optional[str] = None):
        super().__init__(message)
        self.server_message = server_message

    def user_message(self, fallback: str) -> str:
        """Message to show the user: the server's, else ``fallback``."""
        return self.server_message or fallback
