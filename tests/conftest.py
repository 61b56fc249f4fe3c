"""Shared pytest fixtures."""

import os

import pytest

from chit.config import clear_settings_cache, set_config_path


@pytest.fixture
def spec_secret():
    return "cw_0x689RpI-jtRR7oE8h_eQsKImvJapLeSbXpwF4e4="


@pytest.fixture(autouse=True)
def clean_settings(tmp_path, monkeypatch):
    """Isolate every test from the caller's environment and config files."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("CHIT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    set_config_path(None)
    clear_settings_cache()
    yield
    # load_dotenv writes straight into os.environ
    os.environ.clear()
    os.environ.update(original_env)
    set_config_path(None)
    clear_settings_cache()
