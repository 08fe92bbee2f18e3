"""
Core module providing foundational components for the application.

Includes exceptions, exit codes and result objects.
"""

from .exceptions import (
    EXIT_CODES,
    ApiError,
    AuthenticationError,
    FileError,
    ValidationError,
    VerifactuError,
    get_exit_code,
)
from .results import Result, ResultFiles, Session, SubmissionResult

__all__ = [
    'EXIT_CODES',
    'ApiError',
    'AuthenticationError',
    'FileError',
    'ValidationError',
    'VerifactuError',
    'get_exit_code',
    'Result',
    'ResultFiles',
    'Session',
    'SubmissionResult',
]
