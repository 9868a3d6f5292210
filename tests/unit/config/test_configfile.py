##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Workit
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Workit.
##############################################################################

"""
Tests for the `configfile.py` module and the `Config` object.
"""

from pathlib import Path

import pytest
import yaml

from workit.config import Config, configfile
from tests.fixture_types import FixtureModification


class TestEnvironmentOverrides:
    """
    Tests for `apply_env_overrides`.
    """

    def test_values_are_copied(self):
        """
        Test that plain environment variables replace the configured values.
        """
        config = {"storage": {"backend": "auto"}}

        configfile.apply_env_overrides(
            config,
            environ={"DATABASE_URL": "postgres://db/workit", "MONGODB_URI": "mongodb://mongo:27017"},
        )

        assert config["storage"]["database_url"] == "postgres://db/workit"
        assert config["storage"]["mongodb_uri"] == "mongodb://mongo:27017"
        assert config["storage"]["backend"] == "auto"

    @pytest.mark.parametrize(
        "raw_value, expected",
        [("1", True), ("true", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("no", False)],
    )
    def test_flags_are_parsed(self, raw_value: str, expected: bool):
        """
        Test how boolean flags are read from the environment.

        Args:
            raw_value: The value of the environment variable.
            expected: The resulting flag.
        """
        config = {}

        configfile.apply_env_overrides(config, environ={"USE_POSTGRES": raw_value})

        assert config["storage"]["use_postgres"] is expected

    def test_empty_values_are_ignored(self):
        """
        Test that an empty environment variable leaves the configured value alone.
        """
        config = {"storage": {"database_url": "sqlite:///workit.db"}}

        configfile.apply_env_overrides(config, environ={"DATABASE_URL": ""})

        assert config["storage"]["database_url"] == "sqlite:///workit.db"

    def test_log_level_override(self):
        """
        Test that `WORKIT_LOG_LEVEL` lands in the logging section.
        """
        config = {}

        configfile.apply_env_overrides(config, environ={"WORKIT_LOG_LEVEL": "DEBUG"})

        assert config == {"logging": {"level": "DEBUG"}}


def test_load_defaults_fills_missing_keys():
    """
    Test that defaults are only added where a value is missing.
    """
    config = {"storage": {"backend": "sql"}, "logging": None}

    configfile.load_defaults(config)

    assert config["storage"]["backend"] == "sql"
    assert config["storage"]["mongodb_database"] == "workit"
    assert config["storage"]["use_in_memory_mongodb"] is False
    assert config["logging"] == {"level": "INFO"}


def test_get_config_without_file_uses_defaults(config_clean_environment: FixtureModification, tmp_path: Path):
    """
    Test that a missing `app.yaml` is not an error.

    Args:
        config_clean_environment: Removes configuration environment variables.
        tmp_path: The temporary directory of the test.
    """
    assert configfile.get_config(str(tmp_path)) == configfile.get_default_config()


def test_get_config_reads_app_yaml_then_environment(
    config_clean_environment: FixtureModification, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    """
    Test the precedence of environment variables over `app.yaml` over defaults.

    Args:
        config_clean_environment: Removes configuration environment variables.
        tmp_path: The temporary directory of the test.
        monkeypatch: PyTest monkeypatch fixture.
    """
    app_yaml = {"storage": {"backend": "sql", "database_url": "sqlite:///from-file.db"}, "logging": {"level": "DEBUG"}}
    (tmp_path / "app.yaml").write_text(yaml.dump(app_yaml))
    monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")

    config = configfile.get_config(str(tmp_path))

    assert config["storage"]["backend"] == "sql"
    assert config["storage"]["database_url"] == "sqlite:///from-env.db"
    assert config["storage"]["use_mongodb"] is False
    assert config["logging"]["level"] == "DEBUG"


def test_find_config_file_in_workit_home(
    config_clean_environment: FixtureModification,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
):
    """
    Test that `app.yaml` is found in `WORKIT_HOME` when the working directory has none.

    Args:
        config_clean_environment: Removes configuration environment variables.
        tmp_path: The temporary directory of the test.
        monkeypatch: PyTest monkeypatch fixture.
    """
    home = tmp_path / "home"
    home.mkdir()
    (home / "app.yaml").write_text("storage:\n  backend: memory\n")
    monkeypatch.setenv("WORKIT_HOME", str(home))
    monkeypatch.chdir(tmp_path)

    assert configfile.find_config_file() == str(home / "app.yaml")


def test_initialize_config_replaces_global(
    config_clean_environment: FixtureModification, config_restore: Config, tmp_path: Path
):
    """
    Test that `initialize_config` builds a new global `CONFIG` with namespaces.

    Args:
        config_clean_environment: Removes configuration environment variables.
        config_restore: The global configuration, restored after the test.
        tmp_path: The temporary directory of the test.
    """
    (tmp_path / "app.yaml").write_text("storage:\n  backend: mongodb\n")

    config = configfile.initialize_config(str(tmp_path))

    assert configfile.CONFIG is config
    assert config.storage.backend == "mongodb"
    assert config.logging.level == "INFO"


def test_config_str_masks_passwords():
    """
    Test that printing the configuration never shows a connection password.
    """
    config = Config(
        {
            "storage": {"database_url": "postgresql://workit:secret@db/workit", "use_postgres": True},
            "logging": {"level": "INFO"},
        }
    )

    rendered = str(config)

    assert "secret" not in rendered
    assert "postgresql://workit:******@db/workit" in rendered
    assert "use_postgres: True" in rendered


def test_config_without_sections():
    """
    Test that missing sections are left as None.
    """
    config = Config({})

    assert config.storage is None
    assert "storage:\n    None" in str(config)
