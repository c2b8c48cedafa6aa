"""Tests for bridge settings in core/config.py

File tests use pytest's tmp_path; the real user config file is never touched.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

from hue_rest.core.config import (
    USER_CONFIG_FILE,
    load_settings,
    load_settings_from_env,
    load_settings_from_user_config,
    save_credentials,
)


class TestConstants:

    def test_user_config_file_path(self):
        """USER_CONFIG_FILE should point to ~/.hue_rest/config.json."""
        assert isinstance(USER_CONFIG_FILE, Path)
        assert USER_CONFIG_FILE.name == 'config.json'
        assert '.hue_rest' in str(USER_CONFIG_FILE)


class TestLoadFromEnv:

    @patch.dict(os.environ, {}, clear=True)
    def test_no_address(self):
        assert load_settings_from_env() is None

    @patch.dict(os.environ, {'HUE_BRIDGE_ADDRESS': '192.168.1.10', 'HUE_USERNAME': 'user',
                             'HUE_CLIENTKEY': 'key'}, clear=True)
    def test_defaults_port(self):
        assert load_settings_from_env() == {
            'address': '192.168.1.10',
            'port': 443,
            'username': 'user',
            'clientkey': 'key',
        }

    @patch.dict(os.environ, {'HUE_BRIDGE_ADDRESS': '192.168.1.10', 'HUE_BRIDGE_PORT': '8443'}, clear=True)
    def test_port_from_env(self):
        settings = load_settings_from_env()
        assert settings['port'] == 8443
        assert settings['username'] == ''

    @patch.dict(os.environ, {'HUE_BRIDGE_ADDRESS': '192.168.1.10', 'HUE_BRIDGE_PORT': 'https'}, clear=True)
    def test_invalid_port_falls_back(self):
        assert load_settings_from_env()['port'] == 443


class TestUserConfigFile:

    def test_missing_file(self, tmp_path):
        assert load_settings_from_user_config(tmp_path / 'config.json') is None

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{not json')
        assert load_settings_from_user_config(path) is None

    def test_file_without_address(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'username': 'user'}))
        assert load_settings_from_user_config(path) is None

    def test_save_then_load(self, tmp_path):
        path = tmp_path / 'nested' / 'config.json'

        assert save_credentials('192.168.1.10', 'abc123', 'deadbeef', path=path) is True

        assert load_settings_from_user_config(path) == {
            'address': '192.168.1.10',
            'port': 443,
            'username': 'abc123',
            'clientkey': 'deadbeef',
        }
        assert oct(path.stat().st_mode & 0o777) == oct(0o600)

    def test_save_keeps_other_keys(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'note': 'keep me', 'username': 'old'}))

        save_credentials('192.168.1.10', 'new', 'key', path=path)

        config = json.loads(path.read_text())
        assert config['note'] == 'keep me'
        assert config['username'] == 'new'

    def test_invalid_utf8_file(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_bytes(b'{"address": "\xff\xfe"}')
        assert load_settings_from_user_config(path) is None

    @patch.dict(os.environ, {}, clear=True)
    def test_invalid_utf8_file_via_priority(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_bytes(b'\xff\xfe garbage')
        assert load_settings(path) is None

    def test_save_over_invalid_utf8_file_starts_fresh(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_bytes(b'\xff\xfe garbage')

        assert save_credentials('1.2.3.4', 'u', 'k', path=path) is True

        assert json.loads(path.read_text(encoding='utf-8')) == {
            'address': '1.2.3.4',
            'port': 443,
            'username': 'u',
            'clientkey': 'k',
        }

    def test_save_creates_file_owner_only(self, tmp_path):
        path = tmp_path / 'config.json'
        with patch('hue_rest.core.config.os.open', wraps=os.open) as mock_open:
            save_credentials('1.2.3.4', 'u', 'k', path=path)

        assert mock_open.call_args[0][2] == 0o600
        assert path.stat().st_mode & 0o777 == 0o600

    def test_save_tightens_existing_file(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{}')
        path.chmod(0o644)

        save_credentials('1.2.3.4', 'u', 'k', path=path)

        assert path.stat().st_mode & 0o777 == 0o600

    @patch('pathlib.Path.mkdir')
    def test_save_failure_returns_false(self, mock_mkdir, tmp_path):
        mock_mkdir.side_effect = OSError('read-only file system')
        assert save_credentials('192.168.1.10', 'u', 'k', path=tmp_path / 'x' / 'config.json') is False


class TestPriority:

    @patch.dict(os.environ, {'HUE_BRIDGE_ADDRESS': '10.0.0.2'}, clear=True)
    def test_env_wins(self, tmp_path):
        path = tmp_path / 'config.json'
        save_credentials('192.168.1.10', 'u', 'k', path=path)
        assert load_settings(path)['address'] == '10.0.0.2'

    @patch.dict(os.environ, {}, clear=True)
    def test_file_used_without_env(self, tmp_path):
        path = tmp_path / 'config.json'
        save_credentials('192.168.1.10', 'u', 'k', path=path)
        assert load_settings(path)['address'] == '192.168.1.10'
