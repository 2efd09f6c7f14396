"""
Tests for access configuration loading and validation.
"""

import json

import pytest
from bs4 import BeautifulSoup

from amp_access.core.config import (
    AccessConfig,
    DEFAULT_AUTHORIZATION_TIMEOUT_MS,
    resolve_config,
    read_server_state,
)
from amp_access.errors import ConfigError, ErrorCode


VALID_CONFIG = {
    'authorization': 'https://acme.com/a?rid=READER_ID',
    'pingback': 'https://acme.com/p?rid=READER_ID',
}


class TestAccessConfig:
    """Test configuration validation."""

    def test_load_valid_config(self):
        """Test loading a valid raw configuration"""
        config = resolve_config(VALID_CONFIG)
        assert config.authorization_url == 'https://acme.com/a?rid=READER_ID'
        assert config.pingback_url == 'https://acme.com/p?rid=READER_ID'
        assert config.authorization_timeout_ms == DEFAULT_AUTHORIZATION_TIMEOUT_MS
        assert config.service_url is None
        assert config.proxy_origins == ['cdn.ampproject.org']

    def test_missing_authorization_url(self):
        """Test that a missing authorization URL is named in the error"""
        raw = dict(VALID_CONFIG)
        del raw['authorization']
        with pytest.raises(ConfigError, match='"authorization" URL must be specified') as exc_info:
            resolve_config(raw)
        assert exc_info.value.field == 'authorization'
        assert exc_info.value.error_code == ErrorCode.CONFIGURATION_ERROR

    def test_empty_pingback_url(self):
        """Test that an empty pingback URL is rejected"""
        raw = dict(VALID_CONFIG, pingback='')
        with pytest.raises(ConfigError, match='"pingback" URL must be specified') as exc_info:
            resolve_config(raw)
        assert exc_info.value.field == 'pingback'

    def test_dataclass_config_is_validated(self):
        """Test that AccessConfig instances are validated as well"""
        config = AccessConfig(authorization_url='https://acme.com/a', pingback_url='')
        with pytest.raises(ConfigError):
            resolve_config(config)

    def test_invalid_timeout(self):
        """Test timeout validation"""
        with pytest.raises(ConfigError, match='must be positive'):
            resolve_config(dict(VALID_CONFIG, authorization_timeout=0))
        with pytest.raises(ConfigError, match='must be an integer'):
            resolve_config(dict(VALID_CONFIG, authorization_timeout='soon'))

    def test_non_mapping_config(self):
        """Test that non-mapping input is rejected"""
        with pytest.raises(ConfigError):
            resolve_config(['https://acme.com/a'])

    def test_optional_fields(self):
        """Test optional configuration fields"""
        config = resolve_config(dict(
            VALID_CONFIG,
            authorization_timeout='1500',
            service_url='http://localhost:8000/af',
            proxy_origins='proxy.example, cache.example',
        ))
        assert config.authorization_timeout_ms == 1500
        assert config.service_url == 'http://localhost:8000/af'
        assert config.proxy_origins == ['proxy.example', 'cache.example']

    def test_error_to_dict(self):
        """Test structured error output"""
        with pytest.raises(ConfigError) as exc_info:
            resolve_config({})
        data = exc_info.value.to_dict()
        assert data['error'] == 'configuration_error'
        assert data['details']['field'] == 'authorization'


class TestConfigSources:
    """Test configuration files and environment."""

    def test_from_yaml_file(self, tmp_path):
        """Test loading YAML configuration"""
        path = tmp_path / "access.yaml"
        path.write_text(
            "authorization: https://acme.com/a?rid=READER_ID\n"
            "pingback: https://acme.com/p?rid=READER_ID\n"
            "authorization_timeout: 2000\n",
            encoding="utf-8",
        )
        config = AccessConfig.from_file(path)
        assert config.authorization_url == 'https://acme.com/a?rid=READER_ID'
        assert config.authorization_timeout_ms == 2000

    def test_from_json_file(self, tmp_path):
        """Test loading JSON configuration"""
        path = tmp_path / "access.json"
        path.write_text(json.dumps(VALID_CONFIG), encoding="utf-8")
        config = AccessConfig.from_file(str(path))
        assert config.pingback_url == 'https://acme.com/p?rid=READER_ID'

    def test_from_empty_yaml_file(self, tmp_path):
        """Test that an empty file fails validation"""
        path = tmp_path / "access.yml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError):
            AccessConfig.from_file(path)

    def test_unsupported_and_missing_files(self, tmp_path):
        """Test file format and existence checks"""
        path = tmp_path / "access.ini"
        path.write_text("[access]", encoding="utf-8")
        with pytest.raises(ValueError):
            AccessConfig.from_file(path)
        with pytest.raises(FileNotFoundError):
            AccessConfig.from_file(tmp_path / "missing.yaml")

    def test_from_env(self, monkeypatch):
        """Test configuration from environment variables"""
        monkeypatch.setenv("AMP_ACCESS_AUTHORIZATION_URL", "https://acme.com/a")
        monkeypatch.setenv("AMP_ACCESS_PINGBACK_URL", "https://acme.com/p")
        monkeypatch.setenv("AMP_ACCESS_AUTHORIZATION_TIMEOUT", "500")
        monkeypatch.delenv("AMP_ACCESS_SERVICE_URL", raising=False)
        monkeypatch.delenv("AMP_ACCESS_PROXY_ORIGINS", raising=False)
        config = AccessConfig.from_env()
        assert config.authorization_url == "https://acme.com/a"
        assert config.authorization_timeout_ms == 500
        assert config.service_url is None

    def test_from_env_missing(self, monkeypatch):
        """Test environment configuration without URLs"""
        monkeypatch.delenv("AMP_ACCESS_AUTHORIZATION_URL", raising=False)
        with pytest.raises(ConfigError):
            AccessConfig.from_env()


class TestServerState:
    """Test reading the server state marker."""

    def test_read_state(self):
        """Test reading the state token"""
        document = BeautifulSoup(
            '<html><head><meta name="i-amp-access-state" content="STATE1"></head></html>',
            "html.parser",
        )
        assert read_server_state(document) == 'STATE1'

    def test_missing_state(self):
        """Test that a missing marker yields no state"""
        document = BeautifulSoup('<html><head></head><body></body></html>', "html.parser")
        assert read_server_state(document) is None

    def test_read_does_not_mutate(self):
        """Test that reading leaves the document untouched"""
        html = '<html><head><meta name="i-amp-access-state" content="S"></head><body></body></html>'
        document = BeautifulSoup(html, "html.parser")
        before = str(document)
        read_server_state(document)
        assert str(document) == before
