# tests/core/test_config_management.py
import json

import pytest

from sitecheck.core.managers.config_manager import ConfigManager
from sitecheck.core.services.site_check_service import SiteCheckService
from sitecheck.core.utils.path_utils import PathUtils

# A small, predictable configuration for the tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "indexer": {
        "pattern": "**/*.html",
        "workers": 4,
        "show_progress": False
    },
    "scanner": {
        "parser": "html.parser",
        "selectors": {"links": "a[href]", "images": "img[src]", "fragments": "[id]"}
    },
    "validator": {
        "check_images": True,
        "index_files": ["index.html", "index.htm"],
        "ignore_links": ["/drafts/*"],
        "max_suggestions": 2
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Points the ConfigManager at a temporary settings.json and reloads it.
    The singleton is shared, so every test starts from a reset.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: settings_file)

    manager = ConfigManager()
    manager.reset()
    yield manager
    monkeypatch.undo()
    manager.reset()


def test_packaged_settings_file_exists():
    assert PathUtils.get_settings_file().is_file()


def test_config_manager_is_a_singleton(config_env):
    assert ConfigManager() is config_env


def test_config_manager_load(config_env):
    config = config_env.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["indexer"]["workers"] == 4


def test_config_manager_get_nested(config_env):
    assert config_env.get_nested("scanner.selectors.links") == "a[href]"
    assert config_env.get_nested("non.existent.key", "default") == "default"
    assert config_env.get_nested("debug.level.deeper", "fallback") == "fallback"


def test_config_manager_set_nested_casts_to_existing_type(config_env):
    config_env.set_nested("indexer.workers", "8")
    assert config_env.get_nested("indexer.workers") == 8

    config_env.set_nested("validator.check_images", "false")
    assert config_env.get_nested("validator.check_images") is False

    config_env.set_nested("new_feature.enabled", "True")
    assert config_env.get_nested("new_feature.enabled") == "True"


def test_config_manager_reset(config_env):
    config_env.set_nested("debug.level", "DEBUG")
    assert config_env.get_nested("debug.level") == "DEBUG"

    config_env.reset()
    assert config_env.get_nested("debug.level") == "WARNING"


def test_load_file_deep_merges(config_env, tmp_path):
    override = tmp_path / "user.json"
    override.write_text(json.dumps({"indexer": {"workers": 1}, "validator": {"check_images": False}}))

    config_env.load_file(override)
    assert config_env.get_nested("indexer.workers") == 1
    assert config_env.get_nested("indexer.pattern") == "**/*.html"
    assert config_env.get_nested("validator.check_images") is False
    assert config_env.get_nested("validator.max_suggestions") == 2


def test_load_file_rejects_non_object(config_env, tmp_path):
    override = tmp_path / "user.json"
    override.write_text("[1, 2]")
    with pytest.raises(ValueError):
        config_env.load_file(override)


def test_missing_settings_file_gives_empty_config(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: tmp_path / "absent.json")
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_all() == {}
        assert manager.get_nested("indexer.workers", 3) == 3
    finally:
        monkeypatch.undo()
        manager.reset()


# --- Controllers built from configuration ---

def test_service_builds_controllers_from_config(config_env):
    service = SiteCheckService(config_env)

    indexer = service.index_controller()
    assert indexer.default_workers == 4
    assert indexer.settings.selectors.links == "a[href]"

    validator = service.validation_controller()
    assert validator.index_files == ("index.html", "index.htm")
    assert validator.ignore.ignored_links == {"/drafts/*"}
    assert validator.suggester.max_suggestions == 2
    assert service.show_progress() is False


def test_explicit_arguments_override_config(config_env, tmp_path):
    ignore_file = tmp_path / "ignore.json"
    ignore_file.write_text(json.dumps({"links": ["/old/*"]}))
    service = SiteCheckService(config_env)

    assert service.index_controller(workers=2, pattern="**/*.htm").pattern == "**/*.htm"
    assert service.index_controller(workers=2).default_workers == 2

    validator = service.validation_controller(check_images=False, ignore_file=ignore_file)
    assert validator.check_images is False
    assert validator.ignore.ignored_links == {"/drafts/*", "/old/*"}
