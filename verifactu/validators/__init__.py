"""
Validators module for invoice validation.
"""

from .invoice_validator import InvoiceValidator

__all__ = [
    'InvoiceValidator',
]
