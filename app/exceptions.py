"""Custom exceptions for the application."""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Exception raised when user-supplied input is rejected."""

    pass


class ConfigurationError(AppException):
    """Exception raised when partner configuration is invalid."""

    pass
