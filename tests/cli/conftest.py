"""Fixtures for CLI tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def config_file(tmp_path, data_dir, monkeypatch):
    """Point the CLI at a throwaway config so nothing touches the home directory."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"paths:\n"
        f"  data_dir: {data_dir}\n"
        f"  log_file: {tmp_path / 'vylobot.log'}\n"
        f"owner:\n"
        f"  owner_ids: [6281100000111]\n"
        f"variant_seed: 3\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("VYLOBOT_CONFIG", str(path))
    return path
