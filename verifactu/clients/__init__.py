"""
API clients module.
"""

from .verifactu_client import VerifactuClient

__all__ = [
    'VerifactuClient',
]
