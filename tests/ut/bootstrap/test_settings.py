import pytest
import yaml

from tabula.bootstrap.config.loader import CONFIG_ENV, get_configfile
from tabula.bootstrap.config.settings import TabulaConfig, load_config
from tabula.core.models.key import KeyMode


def write_config(path, data) -> None:
    path.write_text(yaml.safe_dump(data))


@pytest.mark.ut
def test_defaults_without_config_file():
    assert get_configfile() is None

    config = TabulaConfig()

    assert config.scan.limit == 20
    assert config.scan.mode is KeyMode.raw
    assert config.store.keyspace == "kv"
    assert config.inspect.handle_upper_bound == 1_000_000_000


@pytest.mark.ut
def test_config_file_in_working_directory(tmp_path):
    write_config(tmp_path / "tabula.yaml", {"scan": {"mode": "logical", "limit": 5}})

    config = TabulaConfig()

    assert config.scan.mode is KeyMode.logical
    assert config.scan.limit == 5


@pytest.mark.ut
def test_config_file_from_env(tmp_path, monkeypatch):
    file = tmp_path / "custom.yaml"
    write_config(file, {"store": {"path": str(tmp_path / "data"), "keyspace": "snap"}})
    monkeypatch.setenv(CONFIG_ENV, str(file))

    config = TabulaConfig()

    assert config.store.path == tmp_path / "data"
    assert config.store.keyspace == "snap"


@pytest.mark.ut
def test_env_overrides_config_file(tmp_path, monkeypatch):
    write_config(tmp_path / "tabula.yaml", {"scan": {"mode": "logical", "limit": 5}})
    monkeypatch.setenv("TABULA_SCAN__LIMIT", "7")

    config = TabulaConfig()

    assert config.scan.limit == 7
    assert config.scan.mode is KeyMode.logical


@pytest.mark.ut
def test_missing_config_file_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "missing.yaml"))

    with pytest.raises(SystemExit):
        get_configfile()


@pytest.mark.ut
def test_invalid_config_is_reported(tmp_path):
    write_config(tmp_path / "tabula.yaml", {"scan": {"limit": 0}})

    with pytest.raises(SystemExit) as exc_info:
        load_config()

    assert "scan.limit" in str(exc_info.value)
