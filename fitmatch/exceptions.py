"""Exception types raised across FitMatch."""


class FitMatchError(Exception):
    """Base exception for FitMatch errors"""


class CatalogError(FitMatchError):
    """Raised when the program catalog cannot be loaded or validated"""


class StorageError(FitMatchError):
    """Raised when a persistence backend fails to read or write"""


class InvalidActionError(FitMatchError):
    """Raised when an AI-proposed action has a malformed payload"""

    def __init__(self, message: str, action_type: str = "unknown"):
        super().__init__(message)
        self.action_type = action_type


class ChatServiceError(FitMatchError):
    """Raised when the chat model call fails"""
