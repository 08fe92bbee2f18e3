"""
Verifactu invoice sender.

Submits invoice records to the Verifactu API and stores the outcome of each
submission as a result file.
"""

from typing import Optional

from .config.settings import get_settings
from .core.exceptions import VerifactuError
from .core.results import Result
from .services.invoice_service import InvoiceService

__version__ = '1.0.0'


def submit_invoice(
    username: str,
    api_key: str,
    invoice_file_path: str,
    base_url: Optional[str] = None,
    output_dir: Optional[str] = None,
    timeout_ms: Optional[int] = None,
    verbose: bool = False,
    throw_errors: bool = False
) -> Result[bool]:
    """
    Submit an invoice to the Verifactu API.

    Missing options are taken from the environment settings.

    Args:
        username: Verifactu username
        api_key: Verifactu API key
        invoice_file_path: Path to the invoice JSON file
        base_url: API base URL override
        output_dir: Result directory override
        timeout_ms: Request timeout override in milliseconds
        verbose: Log structured error details on failure
        throw_errors: Re-raise the failure instead of returning it

    Returns:
        Result whose error, on failure, is the exception that stopped the run
    """
    try:
        config = get_settings().to_client_config(
            base_url=base_url,
            output_dir=output_dir,
            timeout_ms=timeout_ms
        )
    except VerifactuError as e:
        if throw_errors:
            raise
        return Result.failure_result(e)
    service = InvoiceService(config)

    try:
        return Result.success_result(
            service.process(username, api_key, invoice_file_path, verbose=verbose)
        )
    except Exception as e:
        if throw_errors:
            raise
        return Result.failure_result(e)
    finally:
        service.client.close()


__all__ = [
    'submit_invoice',
    'InvoiceService',
    'Result',
    '__version__',
]
