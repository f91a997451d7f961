from mcastrecv.config import (
    DEFAULT_GROUP,
    DEFAULT_INTERFACE,
    DEFAULT_SERVICE,
    DEFAULT_TIMEOUT,
    Configuration,
    default_settings,
)


def test_default_settings():
    settings = default_settings()
    assert settings["interface"] == DEFAULT_INTERFACE
    assert settings["quiet"] is False
    assert settings["timeout"] == DEFAULT_TIMEOUT
    assert settings["group"] == DEFAULT_GROUP
    assert settings["service"] == DEFAULT_SERVICE


def test_default_settings_are_fresh():
    """Each call returns its own dict, so overlaying one run leaves the next alone."""
    first = default_settings()
    first["group"] = "239.1.1.1"
    assert default_settings()["group"] == DEFAULT_GROUP


def test_configuration_defaults():
    config = Configuration()
    assert config.group == "224.0.0.1"
    assert config.service == "discard"
    assert config.timeout == 0
    assert config.interface == ""
    assert config.quiet is False


def test_configuration_matches_default_settings():
    assert Configuration(**default_settings()) == Configuration()
