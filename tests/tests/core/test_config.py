#!/usr/bin/env python3
import json
import os

import pytest

from entryfields.core import config as config_module
from entryfields.core.config import DEFAULT_CONFIG, load_config


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """No global/project config files and no ENTRYFIELDS_* variables."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG_PATH", home / "config.json")
    monkeypatch.chdir(project)
    for key in list(os.environ):
        if key.startswith("ENTRYFIELDS_"):
            monkeypatch.delenv(key)
    return home, project


def test_defaults(isolated):
    cfg = load_config()
    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


def test_project_overrides_global(isolated):
    home, project = isolated
    (home / "config.json").write_text(json.dumps({
        "custom_fields": ["global.fields"],
        "logging": {"level": "WARNING", "format": "{message}"},
    }), encoding="utf-8")
    (project / "entryfields.json").write_text(json.dumps({"logging": {"level": "DEBUG"}}), encoding="utf-8")

    cfg = load_config()
    assert cfg["custom_fields"] == ["global.fields"]
    assert cfg["logging"] == {"level": "DEBUG", "format": "{message}"}


def test_environment_overrides_files(isolated, monkeypatch):
    _home, project = isolated
    (project / "entryfields.json").write_text(json.dumps({"custom_fields": ["project.fields"]}), encoding="utf-8")
    monkeypatch.setenv("ENTRYFIELDS_SETTINGS_PATHS", os.pathsep.join(["site", "", "~/other"]))
    monkeypatch.setenv("ENTRYFIELDS_CUSTOM_FIELDS", "a.fields, b.fields,")
    monkeypatch.setenv("ENTRYFIELDS_LOG_LEVEL", "error")

    cfg = load_config()
    assert cfg["settings_paths"][0] == "site"
    assert len(cfg["settings_paths"]) == 2
    assert not cfg["settings_paths"][1].startswith("~")
    assert cfg["custom_fields"] == ["a.fields", "b.fields"]
    assert cfg["logging"]["level"] == "error"


def test_invalid_project_config_raises(isolated):
    _home, project = isolated
    (project / "entryfields.json").write_text("{", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config()
