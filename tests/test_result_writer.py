"""
Tests for result artifact persistence.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from verifactu.core.exceptions import ApiError, FileError
from verifactu.core.results import SubmissionResult
from verifactu.result_writer import ResultWriter

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


@pytest.fixture
def result():
    return SubmissionResult(
        message='Registro dado de alta',
        invoice_id=4242,
        qr_url='https://www2.agenciatributaria.gob.es/wlpl/TIKE-CONT/ValidarQR?nif=B12345678',
        huella='A1B2C3D4E5',
        estado_aeat='Correcto',
    )


class TestFileNames:
    """Test deterministic file naming."""

    def test_sanitizes_unsafe_characters(self):
        name = ResultWriter.generate_file_name('ga.user', 'A/2025:01', 'ok')
        assert name == 'ga.user_A_2025_01.ok'

    def test_every_unsafe_character(self):
        name = ResultWriter.generate_file_name('u', 'a/b\\c:d*e?f"g<h>i|j', 'err')
        assert name == 'u_a_b_c_d_e_f_g_h_i_j.err'

    def test_safe_series_unchanged(self):
        assert ResultWriter.generate_file_name('u', 'AX-001', 'qr') == 'u_AX-001.qr'


class TestResultWriter:
    """Test success and error artifacts."""

    def setup_method(self):
        self.username = 'ga.user'

    def test_ensure_output_layout(self, tmp_path):
        writer = ResultWriter(str(tmp_path / 'out'))
        writer.ensure_output_layout()

        assert (tmp_path / 'out').is_dir()
        assert (tmp_path / 'out' / 'codisQR').is_dir()

    def test_ensure_output_layout_failure(self, tmp_path):
        blocker = tmp_path / 'file'
        blocker.write_text('x')
        writer = ResultWriter(str(blocker / 'out'))

        with pytest.raises(FileError):
            writer.ensure_output_layout()

    def test_write_success(self, tmp_path, invoice, result):
        writer = ResultWriter(str(tmp_path))

        files = writer.write_success(self.username, invoice, result)

        assert files.result_file == str(tmp_path / 'ga.user_AX20250702-001.ok')
        data = json.loads(Path(files.result_file).read_text(encoding='utf-8'))
        assert data['status'] == 'SUCCESS'
        assert data['timestamp'].endswith('Z')
        assert data['factura'] == {
            'IDEmisorFactura': 'B12345678',
            'NumSerieFactura': 'AX20250702-001',
            'FechaExpedicionFactura': '2025-07-02',
            'ImporteTotal': 121,
        }
        assert data['resposta'] == {
            'invoiceId': 4242,
            'message': 'Registro dado de alta',
            'qrUrl': result.qr_url,
            'huella': 'A1B2C3D4E5',
            'estadoAeat': 'Correcto',
        }

    def test_write_success_renders_qr_png(self, tmp_path, invoice, result):
        writer = ResultWriter(str(tmp_path))

        files = writer.write_success(self.username, invoice, result)

        assert files.qr_file == str(tmp_path / 'codisQR' / 'ga.user_AX20250702-001.qr')
        assert Path(files.qr_file).read_bytes().startswith(PNG_SIGNATURE)

    def test_write_success_without_qr_url(self, tmp_path, invoice):
        writer = ResultWriter(str(tmp_path))

        files = writer.write_success(self.username, invoice, SubmissionResult(message='ok'))

        assert files.qr_file is None
        assert list((tmp_path / 'codisQR').iterdir()) == []

    def test_qr_failure_becomes_file_error(self, tmp_path, invoice, result):
        writer = ResultWriter(str(tmp_path))

        with patch('verifactu.result_writer.qrcode.QRCode', side_effect=RuntimeError('no encoder')):
            with pytest.raises(FileError) as exc_info:
                writer.write_success(self.username, invoice, result)

        assert 'no encoder' in str(exc_info.value)
        assert list(tmp_path.glob('*.ok')) == []

    def test_non_finite_values_are_not_written(self, tmp_path, invoice):
        writer = ResultWriter(str(tmp_path))
        invoice['ImporteTotal'] = float('nan')

        with pytest.raises(FileError):
            writer.write_error(self.username, invoice, RuntimeError('boom'))

        assert list(tmp_path.glob('*.err')) == []

    def test_rerun_overwrites(self, tmp_path, invoice, result):
        writer = ResultWriter(str(tmp_path))

        writer.write_success(self.username, invoice, SubmissionResult(message='first'))
        files = writer.write_success(self.username, invoice, SubmissionResult(message='second'))

        ok_files = list(tmp_path.glob('*.ok'))
        assert len(ok_files) == 1
        data = json.loads(Path(files.result_file).read_text(encoding='utf-8'))
        assert data['resposta']['message'] == 'second'

    def test_write_error(self, tmp_path, invoice):
        writer = ResultWriter(str(tmp_path))
        error = ApiError(409, {'message': 'Factura duplicada'})

        path = writer.write_error(self.username, invoice, error)

        assert path == str(tmp_path / 'ga.user_AX20250702-001.err')
        data = json.loads(Path(path).read_text(encoding='utf-8'))
        assert data['status'] == 'ERROR'
        assert data['factura']['NumSerieFactura'] == 'AX20250702-001'
        assert data['error'] == {
            'message': 'Factura duplicada',
            'code': 'API_ERROR',
            'statusCode': 409,
            'details': {'message': 'Factura duplicada'},
        }

    def test_write_error_without_document(self, tmp_path):
        writer = ResultWriter(str(tmp_path))

        path = writer.write_error(self.username, None, RuntimeError('boom'))

        assert path == str(tmp_path / 'ga.user_desconegut.err')
        data = json.loads(Path(path).read_text(encoding='utf-8'))
        assert data['factura'] is None
        assert data['error']['message'] == 'boom'
        assert data['error']['code'] is None
