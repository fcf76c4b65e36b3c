"""Tests for Settings loading and logging setup."""

import logging

import pytest
import yaml

from eodhist.config.settings import DEFAULT_BASE_URL, Settings, get_settings
from eodhist.config.user_config import UserConfig
from eodhist.utils.logging import redact_token, setup_logger


@pytest.fixture
def clean_env(monkeypatch):
    for name in ('EODHD_API_TOKEN', 'EODHIST_BASE_URL', 'EODHIST_TIMEOUT',
                 'EODHIST_LOG_LEVEL', 'EODHIST_LOG_DIR'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def empty_user_config(tmp_path):
    return UserConfig(config_path=tmp_path / '.eodhistrc')


@pytest.fixture
def user_config_with(tmp_path):
    """Build a UserConfig from a YAML mapping written to a temporary rc file."""
    def _build(data):
        path = tmp_path / '.eodhistrc'
        path.write_text(yaml.safe_dump(data))
        return UserConfig(config_path=path)
    return _build


class TestSettings:
    """Test Settings.load_from_env priority rules."""

    def test_defaults(self, clean_env, empty_user_config):
        settings = Settings.load_from_env(empty_user_config)
        assert settings.api.base_url == DEFAULT_BASE_URL
        assert settings.api.token is None
        assert settings.api.timeout == 30.0
        assert settings.logging.file_output is False

    def test_user_config(self, clean_env, user_config_with):
        user_config = user_config_with({'api': {'token': 'from-file', 'timeout': 5}})

        settings = Settings.load_from_env(user_config)

        assert settings.api.token == 'from-file'
        assert settings.api.timeout == 5.0

    def test_environment_overrides_user_config(self, clean_env, user_config_with):
        user_config = user_config_with({'api': {'token': 'from-file'}})
        clean_env.setenv('EODHD_API_TOKEN', 'from-env')
        clean_env.setenv('EODHIST_BASE_URL', 'https://example.com/api')
        clean_env.setenv('EODHIST_TIMEOUT', '2.5')
        clean_env.setenv('EODHIST_LOG_LEVEL', 'debug')

        settings = Settings.load_from_env(user_config)

        assert settings.api.token == 'from-env'
        assert settings.api.base_url == 'https://example.com/api'
        assert settings.api.timeout == 2.5
        assert settings.logging.log_level == 'DEBUG'

    def test_log_dir_enables_file_output(self, clean_env, empty_user_config, tmp_path):
        clean_env.setenv('EODHIST_LOG_DIR', str(tmp_path / 'logs'))
        settings = Settings.load_from_env(empty_user_config)
        assert settings.logging.file_output is True
        assert settings.logging.log_dir == str(tmp_path / 'logs')

    def test_for_testing(self):
        settings = Settings.for_testing()
        assert settings.api.token == 'test-token'
        assert settings.logging.console_output is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestInvalidSettings:
    """Bad values are logged and ignored instead of failing at import."""

    @pytest.mark.parametrize('value', ['30s', '-1', '0', 'inf', 'nan'])
    def test_bad_env_timeout_keeps_default(self, clean_env, empty_user_config, caplog, value):
        clean_env.setenv('EODHIST_TIMEOUT', value)

        with caplog.at_level(logging.WARNING, logger='eodhist'):
            settings = Settings.load_from_env(empty_user_config)

        assert settings.api.timeout == 30.0
        assert 'EODHIST_TIMEOUT' in caplog.text

    def test_bad_env_timeout_keeps_user_config_value(self, clean_env, user_config_with):
        user_config = user_config_with({'api': {'timeout': 12}})
        clean_env.setenv('EODHIST_TIMEOUT', 'soon')

        settings = Settings.load_from_env(user_config)

        assert settings.api.timeout == 12.0

    @pytest.mark.parametrize('value', ['fast', [1, 2], {'seconds': 5}, -3])
    def test_bad_user_config_timeout_keeps_default(self, clean_env, user_config_with, caplog, value):
        user_config = user_config_with({'api': {'timeout': value}})

        with caplog.at_level(logging.WARNING, logger='eodhist'):
            settings = Settings.load_from_env(user_config)

        assert settings.api.timeout == 30.0
        assert '.eodhistrc' in caplog.text

    def test_bad_log_level_keeps_default(self, clean_env, empty_user_config, caplog):
        clean_env.setenv('EODHIST_LOG_LEVEL', 'verbose')

        with caplog.at_level(logging.WARNING, logger='eodhist'):
            settings = Settings.load_from_env(empty_user_config)

        assert settings.logging.log_level == 'WARNING'
        assert 'verbose' in caplog.text

    def test_get_settings_survives_bad_environment(self, clean_env, monkeypatch):
        import eodhist.config.settings as settings_module

        clean_env.setenv('EODHIST_TIMEOUT', '30s')
        clean_env.setenv('EODHIST_LOG_LEVEL', 'verbose')
        monkeypatch.setattr(settings_module, 'UserConfig', lambda: UserConfig(config_path='/nonexistent/.eodhistrc'))
        monkeypatch.setattr(settings_module, '_settings', None)

        settings = get_settings()

        assert settings.api.timeout == 30.0
        assert settings.logging.log_level == 'WARNING'


class TestLogging:
    """Test logger helpers."""

    @pytest.mark.parametrize('text, expected', [
        ('https://x/api/eod/A?api_token=abc&fmt=json', 'https://x/api/eod/A?api_token=***&fmt=json'),
        ('api_token=abc', 'api_token=***'),
        ('no token here', 'no token here'),
    ])
    def test_redact_token(self, text, expected):
        assert redact_token(text) == expected

    def test_setup_logger_file_output(self, tmp_path):
        logger = setup_logger('eodhist_test.file', log_dir=str(tmp_path), log_level='DEBUG',
                              console_output=False, file_output=True)
        logger.debug('hello')
        for handler in logger.handlers:
            handler.flush()

        assert (tmp_path / 'eodhist_test_file.log').read_text().strip().endswith('hello')

    def test_setup_logger_is_idempotent(self):
        logger = setup_logger('eodhist_test.idempotent', console_output=True)
        again = setup_logger('eodhist_test.idempotent', console_output=True)
        assert again is logger
        assert len(logger.handlers) == 1

    @pytest.mark.parametrize('level', ['verbose', '', 'Level 5'])
    def test_setup_logger_unknown_level_falls_back_to_warning(self, level):
        logger = setup_logger(f'eodhist_test.level_{level or "empty"}'.replace(' ', '_'),
                              log_level=level, console_output=False)
        assert logger.level == logging.WARNING

    def test_setup_logger_level_is_case_insensitive(self):
        logger = setup_logger('eodhist_test.lower', log_level='info', console_output=False)
        assert logger.level == logging.INFO

    def test_no_handlers_gets_null_handler(self):
        logger = setup_logger('eodhist_test.silent', console_output=False, file_output=False)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
