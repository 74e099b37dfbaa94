import os
from pathlib import Path
from unittest.mock import patch

from utils.env import find_project_root, load_project_dotenv

# --- Test find_project_root --- #


def test_find_project_root_found_in_start(tmp_path: Path):
    """pyproject.toml in the starting directory."""
    (tmp_path / "pyproject.toml").touch()
    assert find_project_root(start=tmp_path) == tmp_path


def test_find_project_root_found_levels_up(tmp_path: Path):
    """pyproject.toml a few directories above the start."""
    (tmp_path / "pyproject.toml").touch()
    start_dir = tmp_path / "services" / "nested"
    start_dir.mkdir(parents=True)
    assert find_project_root(start=start_dir) == tmp_path


# --- Test load_project_dotenv --- #


@patch("utils.env.load_dotenv", return_value=True)
def test_load_dotenv_called_when_env_file_exists(mock_load_dotenv, tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()
    env_file = tmp_path / ".env"
    env_file.touch()

    assert load_project_dotenv(start=tmp_path) is True
    mock_load_dotenv.assert_called_once_with(dotenv_path=env_file, override=False)


@patch("utils.env.load_dotenv")
def test_load_dotenv_skipped_without_env_file(mock_load_dotenv, tmp_path: Path):
    (tmp_path / "pyproject.toml").touch()

    assert load_project_dotenv(start=tmp_path) is False
    mock_load_dotenv.assert_not_called()


def test_load_dotenv_does_not_override_existing(tmp_path: Path, monkeypatch):
    """Process environment wins over the .env file."""
    (tmp_path / "pyproject.toml").touch()
    (tmp_path / ".env").write_text("MARKET_PRICING_STRATEGY=demand\nMARKET_TOP_PRODUCTS=3")
    monkeypatch.setenv("MARKET_PRICING_STRATEGY", "supply")
    monkeypatch.delenv("MARKET_TOP_PRODUCTS", raising=False)

    load_project_dotenv(start=tmp_path)

    assert os.environ.get("MARKET_PRICING_STRATEGY") == "supply"
    assert os.environ.get("MARKET_TOP_PRODUCTS") == "3"
