import pytest

from favicon_generator.config import DEFAULT_ICONS, Config
from favicon_generator.errors import ConfigError


def test_defaults():
    config = Config.from_mapping()
    assert config.path == "/"
    assert config.background == "#fff"
    assert config.icons == DEFAULT_ICONS


def test_documented_names_accepted():
    config = Config.from_mapping(
        {"appName": "A", "developerURL": "u", "theme_color": "#000", "html": "head.html"}
    )
    assert config.app_name == "A"
    assert config.developer_url == "u"
    assert config.theme_color == "#000"
    assert config.html_file == "head.html"


def test_icons_merge_with_defaults():
    config = Config.from_mapping({"icons": {"firefox": {"offset": 5}, "android": False}})
    platforms = config.enabled_platforms()
    assert platforms["firefox"] == {"offset": 5}
    assert "android" not in platforms
    assert platforms["favicons"] == {}


def test_empty_options_object_enables_platform():
    config = Config.from_mapping({"icons": {"coast": {}}})
    assert "coast" in config.enabled_platforms()


def test_unknown_option():
    with pytest.raises(ConfigError):
        Config.from_mapping({"appname": "lowercase typo"})


def test_unknown_platform():
    with pytest.raises(ConfigError):
        Config.from_mapping({"icons": {"palm": True}})


def test_bad_platform_setting():
    with pytest.raises(ConfigError):
        Config.from_mapping({"icons": {"android": "yes"}})
