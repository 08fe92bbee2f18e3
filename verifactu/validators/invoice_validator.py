"""
Invoice Validator.

Validates the structure of an invoice document before it is submitted.
"""

import re
from typing import Any, List

from ..core.exceptions import ValidationError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

DATE_PATTERN = re.compile(r'^\d{4}-\d{1,2}-\d{1,2}$', re.ASCII)


class InvoiceValidator:
    """
    Validates invoice documents.

    Unlike a boolean check, a failed validation raises ValidationError with
    a message describing what is wrong.
    """

    REQUIRED_FIELDS = [
        'IDEmisorFactura',
        'NumSerieFactura',
        'FechaExpedicionFactura',
        'Destinatarios',
        'Desglose',
        'ImporteTotal',
    ]

    def missing_fields(self, data: dict) -> List[str]:
        """Names of required fields that are absent, None or empty strings."""
        return [
            name for name in self.REQUIRED_FIELDS
            if data.get(name) is None or data.get(name) == ''
        ]

    def validate(self, data: Any) -> bool:
        """
        Validate invoice document structure.

        Args:
            data: Parsed invoice document

        Returns:
            True if the document is valid

        Raises:
            ValidationError: If any check fails
        """
        if not isinstance(data, dict):
            raise ValidationError('Invoice document must be a JSON object')

        missing = self.missing_fields(data)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        issue_date = data['FechaExpedicionFactura']
        if not isinstance(issue_date, str) or not DATE_PATTERN.fullmatch(issue_date):
            raise ValidationError('FechaExpedicionFactura must use the YYYY-MM-DD format')

        for name in ('Destinatarios', 'Desglose'):
            if not isinstance(data[name], (list, tuple)) or len(data[name]) == 0:
                raise ValidationError(f"{name} must be a non-empty array")

        logger.debug(f"Invoice {data['NumSerieFactura']} passed validation")
        return True
