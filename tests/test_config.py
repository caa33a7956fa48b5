from __future__ import annotations

import importlib
import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

_ENV = ("BRAMBLE_CONF", "BRAMBLE_MAX_EXAMPLES", "BRAMBLE_SEED", "BRAMBLE_MAX_SHRINKS")


def _reload_config():
    config = importlib.import_module("bramble.config")
    return importlib.reload(config)


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BRAMBLE_CONF", str(tmp_path / "bramble.conf"))
    try:
        yield tmp_path
    finally:
        for name in _ENV:
            monkeypatch.delenv(name, raising=False)
        _reload_config()


def test_defaults_without_config_file(isolated_config):
    cfg = _reload_config()
    assert cfg.MAX_EXAMPLES == 100
    assert cfg.SEED == 0xC0FFEE
    assert cfg.MAX_SHRINKS == 1000


def test_load_conf_skips_comments_and_blank_lines(isolated_config):
    path = isolated_config / "bramble.conf"
    path.write_text("# tuning\n\nMAX_EXAMPLES = 250\nSEED=0x10\nnot a setting\n", encoding="utf-8")
    cfg = _reload_config()
    assert cfg.load_conf(path) == {"MAX_EXAMPLES": "250", "SEED": "0x10"}
    assert cfg.MAX_EXAMPLES == 250
    assert cfg.SEED == 16


def test_environment_overrides_file(isolated_config, monkeypatch):
    (isolated_config / "bramble.conf").write_text("MAX_SHRINKS=7\n", encoding="utf-8")
    monkeypatch.setenv("BRAMBLE_MAX_SHRINKS", "0")
    monkeypatch.setenv("BRAMBLE_MAX_EXAMPLES", "12")
    cfg = _reload_config()
    assert cfg.MAX_SHRINKS == 0
    assert cfg.MAX_EXAMPLES == 12


def test_invalid_values_fall_back_with_warning(isolated_config, monkeypatch, caplog):
    monkeypatch.setenv("BRAMBLE_MAX_EXAMPLES", "lots")
    monkeypatch.setenv("BRAMBLE_MAX_SHRINKS", "-4")
    with caplog.at_level(logging.WARNING):
        cfg = _reload_config()
    assert cfg.MAX_EXAMPLES == 100
    assert cfg.MAX_SHRINKS == 1000
    assert "Invalid MAX_EXAMPLES 'lots'" in caplog.text
    assert "MAX_SHRINKS must be >= 0" in caplog.text


def test_unknown_keys_are_reported(isolated_config, caplog):
    (isolated_config / "bramble.conf").write_text("MAX_EXAMPLE=5\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        cfg = _reload_config()
    assert cfg.MAX_EXAMPLES == 100
    assert "Ignoring unknown config key 'MAX_EXAMPLE'" in caplog.text


def test_settings_pick_up_reloaded_config(isolated_config, monkeypatch):
    monkeypatch.setenv("BRAMBLE_SEED", "99")
    _reload_config()
    from bramble import Settings

    assert Settings().seed == 99
