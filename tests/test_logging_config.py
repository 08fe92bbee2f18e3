"""
Tests for logging setup.
"""

import logging
from types import SimpleNamespace

import pytest

from verifactu.core.logging_config import configure_from_settings, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quiet_levels = {name: logging.getLogger(name).level for name in ('urllib3', 'PIL')}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)


class TestSetupLogging:
    """Test root logger configuration."""

    def test_level_and_quiet_loggers(self):
        setup_logging(level='debug')

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger('urllib3').level == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level='chatty')

        assert logging.getLogger().level == logging.INFO

    def test_log_file(self, tmp_path):
        log_file = tmp_path / 'logs' / 'run.log'

        setup_logging(format_string='%(levelname)s %(message)s', log_file=str(log_file))
        logging.getLogger('verifactu.test').info('Factura enviada')
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.read_text(encoding='utf-8') == 'INFO Factura enviada\n'


class TestConfigureFromSettings:
    """Test settings-driven configuration."""

    def setup_method(self):
        self.settings = SimpleNamespace(log_level='WARNING', log_format=None, log_file=None)

    def test_uses_settings_level(self):
        configure_from_settings(self.settings)

        assert logging.getLogger().level == logging.WARNING

    def test_verbose_forces_debug(self):
        configure_from_settings(self.settings, verbose=True)

        assert logging.getLogger().level == logging.DEBUG
