"""Unit tests for layered configuration sources.

Tests key lookup order across properties and environment, the properties
file layers, and the providers that feed the default source.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import logging

import pytest

from mailutil.config import source as source_module
from mailutil.config.source import (
    ConfigKey,
    ConfigSource,
    MappingConfigProvider,
    ProcessConfigProvider,
    load_properties,
)


class TestConfigKey:
    """Tests for the ConfigKey naming table."""

    def test_property_names(self):
        """Test every key is valued by its property name."""
        assert ConfigKey.HOST.property_name == "mail.smtp.host"
        assert ConfigKey.STARTTLS.property_name == "mail.smtp.starttls.enable"
        assert ConfigKey.TIMEOUT.property_name == "mail.smtp.timeout"

    def test_env_names(self):
        """Test environment names, including both STARTTLS spellings."""
        assert ConfigKey.HOST.env_names == ("SMTP_HOST",)
        assert ConfigKey.STARTTLS.env_names == ("SMTP_STARTTLS", "SMTP_START_TLS")

    def test_auth_has_no_env_name(self):
        """Test the auth flag is property-only."""
        assert ConfigKey.AUTH.env_names == ()


class TestConfigSourceResolve:
    """Tests for ConfigSource.resolve."""

    def test_property_wins_over_environment(self):
        """Test a property hides the environment variable."""
        source = ConfigSource(
            properties={"mail.smtp.host": "prop.example.com"},
            environment={"SMTP_HOST": "env.example.com"},
        )

        assert source.resolve(ConfigKey.HOST) == "prop.example.com"

    def test_environment_fallback(self):
        """Test the environment is used when no property is set."""
        source = ConfigSource(environment={"SMTP_PORT": "2525"})

        assert source.resolve(ConfigKey.PORT) == "2525"

    def test_missing_key(self):
        """Test None is returned when no source defines the key."""
        assert ConfigSource().resolve(ConfigKey.HOST) is None

    def test_alternate_starttls_env_name(self):
        """Test the second STARTTLS spelling is honoured."""
        source = ConfigSource(environment={"SMTP_START_TLS": "true"})

        assert source.resolve(ConfigKey.STARTTLS) == "true"

    def test_primary_starttls_env_name_wins(self):
        """Test the first STARTTLS spelling wins when both are set."""
        source = ConfigSource(
            environment={"SMTP_STARTTLS": "false", "SMTP_START_TLS": "true"},
        )

        assert source.resolve(ConfigKey.STARTTLS) == "false"

    def test_auth_ignores_environment(self):
        """Test the auth flag is never read from the environment."""
        source = ConfigSource(environment={"SMTP_AUTH": "true", "mail.smtp.auth": "true"})

        assert source.resolve(ConfigKey.AUTH) is None

    def test_keys_resolve_independently(self):
        """Test each key takes the first source defining it."""
        source = ConfigSource(
            properties={"mail.smtp.host": "prop.example.com"},
            environment={"SMTP_HOST": "env.example.com", "SMTP_USER": "envuser"},
        )

        assert source.resolve(ConfigKey.HOST) == "prop.example.com"
        assert source.resolve(ConfigKey.USER) == "envuser"

    def test_empty_property_is_still_defined(self):
        """Test an empty property value shadows the environment."""
        source = ConfigSource(
            properties={"mail.smtp.user": ""},
            environment={"SMTP_USER": "envuser"},
        )

        assert source.resolve(ConfigKey.USER) == ""


class TestLoadProperties:
    """Tests for properties file parsing."""

    def test_reads_key_values(self, properties_file):
        """Test keys and values are read, comments skipped."""
        values = load_properties(properties_file)

        assert values == {
            "mail.smtp.host": "file.smtp.test.com",
            "mail.smtp.port": "587",
            "mail.smtp.user": "fileuser",
            "mail.smtp.password": "filepassword",
        }

    def test_no_interpolation(self, tmp_path, monkeypatch):
        """Test dollar sequences are kept literally."""
        monkeypatch.setenv("SECRET", "expanded")
        path = tmp_path / "smtp.properties"
        path.write_text("mail.smtp.password=pa$$${SECRET}\n", encoding="utf-8")

        assert load_properties(path)["mail.smtp.password"] == "pa$$${SECRET}"

    def test_missing_file_raises(self, tmp_path):
        """Test reading a missing file raises OSError."""
        with pytest.raises(OSError):
            load_properties(tmp_path / "missing.properties")


class TestProviders:
    """Tests for the configuration providers."""

    def test_mapping_provider_defaults_empty(self):
        """Test the mapping provider starts empty."""
        provider = MappingConfigProvider()

        assert dict(provider.system_properties()) == {}
        assert dict(provider.environment()) == {}

    def test_mapping_provider_copies_input(self):
        """Test later changes to the given mappings are not seen."""
        env = {"SMTP_HOST": "a.example.com"}
        provider = MappingConfigProvider(environment=env)
        env["SMTP_HOST"] = "b.example.com"

        assert provider.environment()["SMTP_HOST"] == "a.example.com"

    def test_process_provider_reads_process_state(self, monkeypatch):
        """Test the process provider exposes system properties and os.environ."""
        monkeypatch.setenv("SMTP_HOST", "process.example.com")
        monkeypatch.setitem(source_module.system_properties, "mail.smtp.port", "2525")
        provider = ProcessConfigProvider()

        assert provider.environment()["SMTP_HOST"] == "process.example.com"
        assert provider.system_properties()["mail.smtp.port"] == "2525"


class TestFromProvider:
    """Tests for the standard layered source."""

    def test_system_properties_over_environment(self):
        """Test system properties win over environment variables."""
        provider = MappingConfigProvider(
            system_properties={"mail.smtp.host": "sys.example.com"},
            environment={"SMTP_HOST": "env.example.com"},
        )

        source = ConfigSource.from_provider(provider)

        assert source.resolve(ConfigKey.HOST) == "sys.example.com"

    def test_explicit_properties_win(self):
        """Test explicit properties are layered above everything."""
        provider = MappingConfigProvider(
            system_properties={"mail.smtp.host": "sys.example.com", "mail.smtp.port": "2525"},
        )

        source = ConfigSource.from_provider(
            provider, properties={"mail.smtp.host": "explicit.example.com"}
        )

        assert source.resolve(ConfigKey.HOST) == "explicit.example.com"
        assert source.resolve(ConfigKey.PORT) == "2525"

    def test_file_from_environment_variable(self, properties_file):
        """Test a file named by SMTP_PROPERTIES is loaded."""
        provider = MappingConfigProvider(environment={"SMTP_PROPERTIES": properties_file})

        source = ConfigSource.from_provider(provider)

        assert source.resolve(ConfigKey.HOST) == "file.smtp.test.com"
        assert source.resolve(ConfigKey.USER) == "fileuser"

    def test_file_from_system_property(self, properties_file):
        """Test a file named by the mail.smtp.properties property is loaded."""
        provider = MappingConfigProvider(
            system_properties={"mail.smtp.properties": properties_file},
        )

        source = ConfigSource.from_provider(provider)

        assert source.resolve(ConfigKey.PORT) == "587"

    def test_file_wins_over_system_properties(self, properties_file):
        """Test file values hide system properties for the same key."""
        provider = MappingConfigProvider(
            system_properties={
                "mail.smtp.host": "sys.example.com",
                "mail.smtp.debug": "true",
            },
            environment={"SMTP_PROPERTIES": properties_file},
        )

        source = ConfigSource.from_provider(provider)

        assert source.resolve(ConfigKey.HOST) == "file.smtp.test.com"
        assert source.resolve(ConfigKey.DEBUG) == "true"

    def test_explicit_properties_over_file(self, properties_file):
        """Test explicit properties hide file values."""
        provider = MappingConfigProvider(environment={"SMTP_PROPERTIES": properties_file})

        source = ConfigSource.from_provider(
            provider, properties={"mail.smtp.port": "465"}
        )

        assert source.resolve(ConfigKey.PORT) == "465"
        assert source.resolve(ConfigKey.HOST) == "file.smtp.test.com"

    def test_missing_file_warns_and_falls_back(self, tmp_path, caplog):
        """Test a missing configured file logs a warning and is skipped."""
        missing = tmp_path / "missing.properties"
        provider = MappingConfigProvider(
            system_properties={"mail.smtp.host": "sys.example.com"},
            environment={"SMTP_PROPERTIES": str(missing)},
        )

        with caplog.at_level(logging.WARNING, logger="mailutil.config"):
            source = ConfigSource.from_provider(provider)

        assert source.resolve(ConfigKey.HOST) == "sys.example.com"
        assert "No file at" in caplog.text
        assert "Reverting to system properties only" in caplog.text

    def test_unreadable_file_warns_and_falls_back(self, tmp_path, caplog):
        """Test a file that cannot be decoded logs a warning and is skipped."""
        path = tmp_path / "binary.properties"
        path.write_bytes(b"\xff\xfe\xfa invalid utf-8")
        provider = MappingConfigProvider(
            system_properties={"mail.smtp.host": "sys.example.com"},
            environment={"SMTP_PROPERTIES": str(path)},
        )

        with caplog.at_level(logging.WARNING, logger="mailutil.config"):
            source = ConfigSource.from_provider(provider)

        assert source.resolve(ConfigKey.HOST) == "sys.example.com"
        assert "Reverting to system properties only" in caplog.text

    def test_environment_still_consulted(self):
        """Test environment variables fill keys the property chain lacks."""
        provider = MappingConfigProvider(environment={"SMTP_HOST": "env.example.com"})

        assert ConfigSource.from_provider(provider).resolve(ConfigKey.HOST) == "env.example.com"


class TestFromFile:
    """Tests for sources built from an explicit file."""

    def test_loads_file_over_defaults(self, properties_file):
        """Test file values win and defaults fill the rest."""
        provider = MappingConfigProvider(
            system_properties={"mail.smtp.debug": "true", "mail.smtp.host": "sys.example.com"},
        )

        source = ConfigSource.from_file(properties_file, provider=provider)

        assert source.resolve(ConfigKey.HOST) == "file.smtp.test.com"
        assert source.resolve(ConfigKey.DEBUG) == "true"

    def test_missing_required_file_raises(self, tmp_path):
        """Test a missing required file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="required, not found"):
            ConfigSource.from_file(
                tmp_path / "missing.properties", provider=MappingConfigProvider()
            )

    def test_missing_optional_file_warns(self, tmp_path, caplog):
        """Test a missing optional file warns and uses the defaults."""
        provider = MappingConfigProvider(environment={"SMTP_HOST": "env.example.com"})

        with caplog.at_level(logging.WARNING, logger="mailutil.config"):
            source = ConfigSource.from_file(
                tmp_path / "missing.properties", require_present=False, provider=provider
            )

        assert source.resolve(ConfigKey.HOST) == "env.example.com"
        assert "No file at specified" in caplog.text
