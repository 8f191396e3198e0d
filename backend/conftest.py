import pytest

import config as config_module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Cada test usa su propio config.yaml (inexistente salvo que el test lo escriba)."""
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "config.yaml"))
    config_module.reload_config()
    yield tmp_path / "config.yaml"
    config_module.reload_config()
