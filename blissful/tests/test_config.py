"""Tests for the saved database configuration and runtime settings."""
import json
import os

import pytest

from ..config import (
    CONFIG_FILENAME,
    ENV_AUTH_TOKEN,
    ENV_DATABASE_URL,
    Config,
    DatabaseConfig,
    get_config_dir,
    get_config_file_path,
    update_env_from_config_file,
)
from ..errors import ConfigError

def test_save_and_load(tmp_path):
    """Test the config file keeps both values."""
    path = tmp_path / CONFIG_FILENAME
    DatabaseConfig('libsql://bakery.turso.io', 'secret-token').save(path)

    # Stored as a flat JSON object
    assert json.loads(path.read_text()) == {
        'database_url': 'libsql://bakery.turso.io',
        'auth_token': 'secret-token',
    }

    loaded = DatabaseConfig.load(path)
    assert loaded.database_url == 'libsql://bakery.turso.io'
    assert loaded.auth_token == 'secret-token'

def test_load_missing_file(tmp_path):
    """A missing file is an empty configuration, not an error."""
    loaded = DatabaseConfig.load(tmp_path / 'missing.json')
    assert loaded == DatabaseConfig()
    assert not loaded.is_valid()

def test_load_malformed_file(tmp_path):
    """Test unreadable config files raise ConfigError."""
    path = tmp_path / CONFIG_FILENAME

    path.write_text('{not json')
    with pytest.raises(ConfigError, match='Error loading database config'):
        DatabaseConfig.load(path)

    path.write_text('["libsql://bakery.turso.io"]')
    with pytest.raises(ConfigError, match='JSON object'):
        DatabaseConfig.load(path)

    path.write_text('{"database_url": 42, "auth_token": "x"}')
    with pytest.raises(ConfigError, match='strings'):
        DatabaseConfig.load(path)

def test_validate():
    """Test both values are required."""
    with pytest.raises(ConfigError, match='database URL is missing'):
        DatabaseConfig('', 'token').validate()
    with pytest.raises(ConfigError, match='authentication token is missing'):
        DatabaseConfig('libsql://bakery.turso.io', '  ').validate()

    DatabaseConfig('libsql://bakery.turso.io', 'token').validate()
    assert DatabaseConfig('libsql://bakery.turso.io', 'token').is_valid()

def test_apply_to_env_skips_empty_values(clean_env, monkeypatch):
    """Only non-empty values are exported."""
    monkeypatch.setenv(ENV_AUTH_TOKEN, 'from-shell')

    DatabaseConfig('libsql://bakery.turso.io', '').apply_to_env()

    assert os.environ[ENV_DATABASE_URL] == 'libsql://bakery.turso.io'
    assert os.environ[ENV_AUTH_TOKEN] == 'from-shell'

def test_update_env_from_config_file(clean_env):
    path = clean_env / CONFIG_FILENAME
    DatabaseConfig('libsql://bakery.turso.io', 'file-token').save(path)

    loaded = update_env_from_config_file(path)

    assert loaded.auth_token == 'file-token'
    assert os.environ[ENV_DATABASE_URL] == 'libsql://bakery.turso.io'
    assert os.environ[ENV_AUTH_TOKEN] == 'file-token'

def test_config_dir_override(clean_env):
    """Test BLISSFUL_CONFIG_DIR moves the config file."""
    path = get_config_file_path()
    assert path.name == CONFIG_FILENAME
    assert path.parent == clean_env / 'config'
    assert path.parent.is_dir()

def test_default_config_dir(monkeypatch):
    """The default directory is the per-user application directory."""
    monkeypatch.delenv('BLISSFUL_CONFIG_DIR', raising=False)
    assert get_config_dir().name.lower() == 'blissfulbytesmanagement'

def test_from_env_prefers_config_file(clean_env, monkeypatch):
    """Saved file values win over values already in the environment."""
    monkeypatch.setenv(ENV_DATABASE_URL, 'libsql://old.turso.io')
    monkeypatch.setenv(ENV_AUTH_TOKEN, 'old-token')
    monkeypatch.setenv('POOL_SIZE', '5')

    path = clean_env / CONFIG_FILENAME
    DatabaseConfig('libsql://bakery.turso.io', 'new-token').save(path)

    config = Config.from_env(env_file=clean_env / 'missing.env', config_file=path)

    assert config.database_url == 'libsql://bakery.turso.io'
    assert config.auth_token == 'new-token'
    assert config.pool_size == 5
    assert config.database.is_valid()

def test_from_env_tolerates_broken_file(clean_env, monkeypatch):
    """A broken config file is logged and the environment is used."""
    monkeypatch.setenv(ENV_DATABASE_URL, 'libsql://shell.turso.io')
    monkeypatch.setenv(ENV_AUTH_TOKEN, 'shell-token')

    path = clean_env / CONFIG_FILENAME
    path.write_text('{broken')

    config = Config.from_env(env_file=clean_env / 'missing.env', config_file=path)

    assert config.database_url == 'libsql://shell.turso.io'
    assert config.auth_token == 'shell-token'

def test_config_validate(tmp_path):
    """Test runtime settings validation."""
    config = Config(database_url='libsql://bakery.turso.io', auth_token='token', log_dir=tmp_path / 'logs')
    assert config.validate()
    assert (tmp_path / 'logs').is_dir()

    with pytest.raises(ConfigError):
        Config(database_url='libsql://bakery.turso.io').validate()
    with pytest.raises(ConfigError, match='pool_size'):
        Config(database_url='libsql://bakery.turso.io', auth_token='token', pool_size=0).validate()
