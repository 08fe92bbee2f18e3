"""
Services module for business logic orchestration.
"""

from .invoice_service import InvoiceService

__all__ = [
    'InvoiceService',
]
