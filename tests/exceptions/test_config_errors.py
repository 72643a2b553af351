"""Tests for the exception hierarchy."""

from pathlib import Path

import pytest

from qube.exceptions import ConfigFileError, ConfigurationError, InvalidConfigError, QubeError


class TestQubeError:
    """Base error formatting."""

    def test_message_only(self):
        assert str(QubeError("boom")) == "boom"

    def test_details_rendered(self):
        err = QubeError("boom", details={"path": "a.gd"})
        assert str(err) == "boom (path=a.gd)"
        assert err.details == {"path": "a.gd"}


class TestConfigErrors:
    """Configuration error types."""

    def test_hierarchy(self):
        assert issubclass(ConfigFileError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(ConfigurationError, QubeError)

    def test_config_file_error(self):
        err = ConfigFileError(Path("qube.toml"), "file not found")
        assert err.path == Path("qube.toml")
        assert err.reason == "file not found"
        assert "qube.toml" in str(err)

    def test_invalid_config_error(self):
        err = InvalidConfigError("max_nesting", "deep", "expected an integer")
        assert err.key == "max_nesting"
        assert err.value == "deep"
        assert "expected an integer" in str(err)

    def test_catchable_as_base(self):
        with pytest.raises(QubeError):
            raise InvalidConfigError("x", 1, "unknown setting")
