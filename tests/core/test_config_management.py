# tests/core/test_config_management.py
import json

import pytest

from sami_parser.dom.builder import TreeBuilder
from sami_parser.dom.registry import TagRegistry
from sami_parser.errors import ScanError
from sami_parser.managers.config_manager import ConfigManager
from sami_parser.model import GrammarSettings, ScannerSettings
from sami_parser.services.scan_service import ScanService
from sami_parser.utils.path_utils import PathUtils

# A predictable configuration for these tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "INFO"
    },
    "scanner": {
        "snippet_length": 5
    },
    "grammar": {
        "non_nestable_tags": ["SYNC"],
        "void_tags": ["BR", "HR"]
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Sets up an isolated configuration:
    - Writes a mock 'settings.json' into a temporary directory.
    - Monkeypatches PathUtils to point at it and reloads the singleton.
    - Restores the bundled settings afterwards.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: settings_file)

    manager = ConfigManager()
    manager.reset()
    yield manager

    monkeypatch.undo()
    manager.reset()


def test_config_manager_is_a_singleton():
    assert ConfigManager() is ConfigManager()


def test_bundled_settings_are_loaded():
    manager = ConfigManager()
    manager.reset()
    assert manager.get_nested("grammar.root_tag") == "SAMI"
    assert GrammarSettings.from_config() == GrammarSettings()


def test_config_manager_get_nested(config_env):
    assert config_env.get_nested("scanner.snippet_length") == 5
    assert config_env.get_nested("non.existent.key", "default") == "default"
    assert config_env.get_nested("debug.level.deeper", "default") == "default"


def test_config_manager_get_section(config_env):
    assert config_env.get_section("scanner") == {"snippet_length": 5}
    assert config_env.get_section("missing") == {}


def test_config_manager_get_section_returns_a_copy(config_env):
    config_env.get_section("grammar")["void_tags"] = []
    assert config_env.get_nested("grammar.void_tags") == ["BR", "HR"]


def test_config_manager_ignores_non_object_section(tmp_path, monkeypatch, caplog):
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps({"grammar": ["SAMI"]}))
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: settings_file)
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_section("grammar") == {}
        assert "expected an object" in caplog.text
        assert GrammarSettings.from_config() == GrammarSettings()
    finally:
        monkeypatch.undo()
        manager.reset()


def test_grammar_settings_from_config(config_env):
    settings = GrammarSettings.from_config()
    assert settings.root_tag == "SAMI"
    assert settings.non_nestable_tags == ["SYNC"]
    assert settings.void_tags == ["BR", "HR"]


def test_configured_grammar_drives_the_builder(config_env):
    """With P removed from the non-nestable set, a repeated P nests."""
    tokens = ScanService().tokenize("<SAMI><BODY><SYNC Start=0><P>a<P>b<HR>c</BODY></SAMI>")
    result = TreeBuilder().build(tokens)
    outer = result.cues[0].children[0]
    inner = outer.children[1]
    assert inner.tag == "P"
    assert [getattr(n, "tag", None) for n in inner.children] == [None, "HR", None]
    assert TagRegistry().get("HR").is_void


def test_configured_snippet_length(config_env):
    assert ScannerSettings.from_config().snippet_length == 5
    with pytest.raises(ScanError) as exc_info:
        ScanService().tokenize("<>abcdefgh")
    assert exc_info.value.snippet == "<>abc"


def test_missing_settings_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: tmp_path / "missing.json")
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_section("grammar") == {}
        assert GrammarSettings.from_config() == GrammarSettings()
        assert ScannerSettings.from_config().snippet_length == 15
    finally:
        monkeypatch.undo()
        manager.reset()
