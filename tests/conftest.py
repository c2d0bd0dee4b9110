import pytest

from reversi.logging_setup import reset_logging


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in a temp dir with no user config and a clean root logger."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REVERSI_CONFIG", str(tmp_path / "missing.toml"))
    yield tmp_path
    reset_logging()
