"""
Shared fixtures for the test suite.
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from verifactu.config.settings import ClientConfig


def make_response(status_code=200, body=None):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def login_body(expires_in=timedelta(hours=1), **overrides):
    body = {
        'success': True,
        'token': 'tok-123',
        'expires_at': (datetime.now(timezone.utc) + expires_in).isoformat(),
        'user_name': 'Empresa Demo SL',
    }
    body.update(overrides)
    return body


def submit_body(items=None, **overrides):
    if items is None:
        items = [{
            'id': 4242,
            'url_qr': 'https://www2.agenciatributaria.gob.es/wlpl/TIKE-CONT/ValidarQR?nif=B12345678',
            'Huella': 'A1B2C3D4E5',
            'estado_aeat': 'Correcto',
        }]
    body = {
        'success': True,
        'message': 'Registro dado de alta',
        'data': {'items': items},
    }
    body.update(overrides)
    return body


@pytest.fixture
def invoice():
    return {
        'IDEmisorFactura': 'B12345678',
        'NumSerieFactura': 'AX20250702-001',
        'FechaExpedicionFactura': '2025-07-02',
        'TipoFactura': 'F1',
        'Destinatarios': [{'NombreRazon': 'Cliente SA', 'NIF': 'A87654321'}],
        'Desglose': [{'Impuesto': '01', 'TipoImpositivo': 21, 'BaseImponible': 100, 'Cuota': 21}],
        'ImporteTotal': 121,
    }


@pytest.fixture
def invoice_file(tmp_path, invoice):
    path = tmp_path / 'factura.json'
    path.write_text(json.dumps(invoice), encoding='utf-8')
    return path


@pytest.fixture
def http_session():
    """Stand-in for requests.Session."""
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def config(tmp_path):
    return ClientConfig(
        base_url='https://verifactu.test/api',
        output_dir=str(tmp_path / 'resultats'),
        timeout_ms=5000
    )
