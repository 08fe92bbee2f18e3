"""
Result Writer Module

Persists the outcome of an invoice submission as a JSON artifact
(.ok or .err) and renders the invoice QR code as a PNG image.
"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from .core.exceptions import FileError, VerifactuError
from .core.logging_config import get_logger
from .core.results import ResultFiles, SubmissionResult

logger = get_logger(__name__)

QR_DIR_NAME = 'codisQR'
UNKNOWN_SERIES = 'desconegut'
QR_WIDTH = 256
QR_BORDER = 1

_UNSAFE_CHARS = re.compile(r'[/\\:*?"<>|]')

SUMMARY_FIELDS = (
    'IDEmisorFactura',
    'NumSerieFactura',
    'FechaExpedicionFactura',
    'ImporteTotal',
)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class ResultWriter:
    """
    Writes result artifacts for submitted invoices.

    File names are derived from the username and invoice series number, so a
    later run for the same invoice overwrites the previous artifact.
    """

    def __init__(self, output_dir: str = './resultats'):
        self.output_dir = Path(output_dir)
        self.qr_dir = self.output_dir / QR_DIR_NAME

    def ensure_output_layout(self) -> None:
        """
        Create the output directory and its QR subdirectory.

        Raises:
            FileError: If a directory cannot be created
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.qr_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileError(f"Failed to create output directories: {str(e)}") from e

    @staticmethod
    def generate_file_name(username: str, series_number: Any, extension: str) -> str:
        """
        Build a file name from username and invoice number.

        Characters that are not allowed in file names are replaced with '_'.
        """
        clean_series = _UNSAFE_CHARS.sub('_', str(series_number))
        return f"{username}_{clean_series}.{extension}"

    @staticmethod
    def invoice_summary(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if document is None:
            return None
        return {name: document.get(name) for name in SUMMARY_FIELDS}

    @staticmethod
    def _write_json(path: Path, data: Dict[str, Any]) -> None:
        # serialize first so a rejected value never leaves a truncated file
        text = json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)

    def generate_qr_code(self, username: str, document: Dict[str, Any], qr_url: str) -> str:
        """
        Render a QR code for the given URL and save it as a PNG image.

        Args:
            username: Verifactu username
            document: Invoice document (used for the file name)
            qr_url: URL to encode

        Returns:
            Path of the written image

        Raises:
            FileError: If the image cannot be generated or saved
        """
        self.ensure_output_layout()

        filename = self.generate_file_name(username, document['NumSerieFactura'], 'qr')
        file_path = self.qr_dir / filename

        try:
            qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=QR_BORDER)
            qr.add_data(qr_url)
            qr.make(fit=True)
            qr.box_size = max(1, QR_WIDTH // (qr.modules_count + 2 * QR_BORDER))

            image = qr.make_image(fill_color='black', back_color='white')
            with open(file_path, 'wb') as f:
                image.save(f, format='PNG')
        except Exception as e:
            raise FileError(f"Failed to generate QR code: {str(e)}") from e

        logger.info(f"QR code generated: {file_path}")
        return str(file_path)

    def write_success(
        self,
        username: str,
        document: Dict[str, Any],
        result: SubmissionResult
    ) -> ResultFiles:
        """
        Write the success artifact (.ok) and the QR image when available.

        Raises:
            FileError: If any file cannot be written
        """
        self.ensure_output_layout()

        filename = self.generate_file_name(username, document['NumSerieFactura'], 'ok')
        file_path = self.output_dir / filename

        success_data = {
            'timestamp': utc_timestamp(),
            'status': 'SUCCESS',
            'factura': self.invoice_summary(document),
            'resposta': result.to_dict(),
        }

        # QR first: a rendering failure must not leave a .ok next to the .err
        qr_file = None
        if result.qr_url:
            qr_file = self.generate_qr_code(username, document, result.qr_url)

        try:
            self._write_json(file_path, success_data)
        except (OSError, TypeError, ValueError) as e:
            if qr_file:
                Path(qr_file).unlink(missing_ok=True)
            raise FileError(f"Failed to write success file: {str(e)}") from e

        logger.debug(f"Success artifact written to {file_path}")
        return ResultFiles(result_file=str(file_path), qr_file=qr_file)

    def write_error(
        self,
        username: str,
        document: Optional[Dict[str, Any]],
        error: BaseException
    ) -> str:
        """
        Write the error artifact (.err).

        Args:
            username: Verifactu username
            document: Parsed invoice document, or None if it never parsed
            error: The failure to record

        Returns:
            Path of the written file

        Raises:
            FileError: If the file cannot be written
        """
        self.ensure_output_layout()

        series = (document or {}).get('NumSerieFactura') or UNKNOWN_SERIES
        filename = self.generate_file_name(username, series, 'err')
        file_path = self.output_dir / filename

        if isinstance(error, VerifactuError):
            error_info = error.to_dict()
        else:
            error_info = {
                'message': str(error),
                'code': None,
                'statusCode': None,
                'details': None,
            }

        error_data = {
            'timestamp': utc_timestamp(),
            'status': 'ERROR',
            'factura': self.invoice_summary(document),
            'error': error_info,
        }

        try:
            self._write_json(file_path, error_data)
        except (OSError, TypeError, ValueError) as e:
            raise FileError(f"Failed to write error file: {str(e)}") from e

        return str(file_path)
