from __future__ import annotations

import os

import pytest

import termprompt.config as config_module


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch):
    """Ensure unit tests never pick up settings from the developer's environment.

    ``TERMPROMPT_*`` variables are removed and the cached global settings are
    cleared so every test starts from the defaults.
    """

    for key in list(os.environ):
        if key.startswith("TERMPROMPT_"):
            monkeypatch.delenv(key, raising=False)

    original_settings = config_module._settings
    config_module._settings = None
    try:
        yield
    finally:
        config_module._settings = original_settings
