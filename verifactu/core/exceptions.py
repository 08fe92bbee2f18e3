"""
Custom exception hierarchy for the application.

Each failure kind carries a human-readable message, a machine-readable code
and a status code, and maps to a distinct process exit code.
"""

from typing import Any, Dict, Optional

import requests


EXIT_CODES = {
    'SUCCESS': 0,
    'GENERAL_ERROR': 1,
    'NETWORK_ERROR': 2,
    'VALIDATION_ERROR': 3,
    'API_ERROR': 4,
    'FILE_ERROR': 5,
    'AUTH_ERROR': 6,
}


class VerifactuError(Exception):
    """Base exception for all invoice submission errors."""

    def __init__(self, message: str, code: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used in error artifacts."""
        return {
            'message': self.message,
            'code': self.code,
            'statusCode': self.status_code,
            'details': self.details,
        }


class ApiError(VerifactuError):
    """Raised when the remote API answers with a failure."""

    def __init__(self, status_code: int, data: Optional[Dict[str, Any]] = None):
        data = data if isinstance(data, dict) else {}
        message = data.get('message') or f"API request failed with status {status_code}"
        super().__init__(message, data.get('code') or 'API_ERROR', status_code)
        self.details = data


class AuthenticationError(VerifactuError):
    """Raised when the credential exchange fails or no valid session exists."""

    def __init__(self, message: str):
        super().__init__(message, 'AUTH_ERROR', 401)


class ValidationError(VerifactuError):
    """Raised when an invoice document fails structural checks."""

    def __init__(self, message: str):
        super().__init__(message, 'VALIDATION_ERROR', 400)


class FileError(VerifactuError):
    """Raised on local read, write or directory creation failures."""

    def __init__(self, message: str):
        super().__init__(message, 'FILE_ERROR', 500)


def get_exit_code(error: BaseException) -> int:
    """
    Map an error to the process exit code for its kind.

    Args:
        error: Any exception raised while processing an invoice

    Returns:
        Exit code from EXIT_CODES
    """
    if isinstance(error, AuthenticationError):
        return EXIT_CODES['AUTH_ERROR']
    if isinstance(error, ValidationError):
        return EXIT_CODES['VALIDATION_ERROR']
    if isinstance(error, FileError):
        return EXIT_CODES['FILE_ERROR']
    if isinstance(error, ApiError):
        return EXIT_CODES['API_ERROR']
    if isinstance(error, requests.RequestException):
        return EXIT_CODES['NETWORK_ERROR']
    return EXIT_CODES['GENERAL_ERROR']
