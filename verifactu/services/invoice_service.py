"""
Invoice Service.

Orchestrates the submission of one invoice: read, validate, authenticate,
submit and record the outcome.
"""

import json
from typing import Any, Dict, Optional

from ..clients.verifactu_client import VerifactuClient
from ..config.settings import ClientConfig
from ..core.exceptions import FileError, ValidationError, get_exit_code
from ..core.logging_config import get_logger
from ..result_writer import ResultWriter

logger = get_logger(__name__)


class InvoiceService:
    """
    Service for submitting invoices end to end.

    Every failure is recorded as an error artifact before being re-raised.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client: Optional[VerifactuClient] = None,
        result_writer: Optional[ResultWriter] = None
    ):
        """
        Initialize invoice service.

        Args:
            config: Client configuration (defaults used if None)
            client: Optional API client (creates default if None)
            result_writer: Optional result writer (creates default if None)
        """
        self.config = config or ClientConfig()
        self.client = client or VerifactuClient(self.config)
        self.result_writer = result_writer or ResultWriter(self.config.output_dir)

    @staticmethod
    def read_invoice_file(file_path: str) -> Any:
        """
        Read and parse an invoice JSON file.

        Raises:
            FileError: If the file is missing or cannot be read
            ValidationError: If the content is not valid JSON
        """
        def reject_constant(name: str):
            raise ValidationError(f"Invalid JSON in file: {file_path} - {name} is not allowed")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f, parse_constant=reject_constant)
        except FileNotFoundError as e:
            raise FileError(f"Invoice file not found: {file_path}") from e
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in file: {file_path} - {str(e)}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise FileError(f"Failed to read invoice file: {str(e)}") from e

    def process(
        self,
        username: str,
        api_key: str,
        invoice_file_path: str,
        verbose: bool = False
    ) -> bool:
        """
        Submit one invoice file and record the result.

        Args:
            username: Verifactu username
            api_key: Verifactu API key
            invoice_file_path: Path to the invoice JSON file
            verbose: Log structured error details on failure

        Returns:
            True on success

        Raises:
            VerifactuError: The original failure, after the error artifact
                has been written (best effort)
        """
        invoice_data: Optional[Dict[str, Any]] = None

        try:
            logger.info(f"Reading invoice file: {invoice_file_path}")
            document = self.read_invoice_file(invoice_file_path)
            if isinstance(document, dict):
                invoice_data = document

            logger.info("Validating invoice data...")
            self.client.validate(document)
            logger.info(f"Invoice validation passed for: {invoice_data['NumSerieFactura']}")

            logger.info("Authenticating with the Verifactu API...")
            session = self.client.authenticate(username, api_key)

            logger.info("Submitting invoice to Verifactu...")
            response = self.client.submit(invoice_data, session)

            files = self.result_writer.write_success(username, invoice_data, response)

            logger.info("SUCCESS: invoice submitted")
            logger.info(f"Invoice ID: {response.invoice_id}")
            logger.info(f"AEAT status: {response.estado_aeat}")
            logger.info(f"QR URL: {response.qr_url}")
            logger.info(f"Result saved to: {files.result_file}")
            return True

        except Exception as error:
            try:
                error_file = self.result_writer.write_error(username, invoice_data, error)
                logger.info(f"Error details saved to: {error_file}")
            except Exception as file_error:
                logger.error(f"Failed to save error file: {str(file_error)}")

            logger.error(f"FAILED: {str(error)}")
            details = getattr(error, 'details', None)
            if verbose and details:
                logger.error(f"Details: {json.dumps(details, indent=2, ensure_ascii=False, default=str)}")

            raise

    @staticmethod
    def get_exit_code(error: BaseException) -> int:
        """Exit code for the kind of the given error."""
        return get_exit_code(error)
