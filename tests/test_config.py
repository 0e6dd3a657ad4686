"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from meetingslots.config import USER_CONFIG_PATH, AppConfig, Colleague, get_default_config_path
from meetingslots.domain.exceptions import ConfigurationError


def _write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "Europe/Berlin"
        assert config.defaults.duration_minutes == 30
        assert config.calendar_file is None
        assert config.colleagues == []

    def test_load_from_yaml(self, tmp_path):
        """Values are read and a relative calendar path is resolved."""
        path = _write_config(
            tmp_path,
            "timezone: America/New_York\n"
            "calendar_file: events.yaml\n"
            "defaults:\n"
            "  duration_minutes: 45\n"
            "colleagues:\n"
            "  - name: alice\n"
            "    email: Alice@Example.com\n",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "America/New_York"
        assert config.defaults.duration_minutes == 45
        assert config.calendar_file == tmp_path / "events.yaml"
        assert config.colleagues[0].name == "alice"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = _write_config(tmp_path, "colleagues: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = _write_config(tmp_path, "- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            AppConfig.load_from_yaml(path)

    def test_negative_duration_rejected(self, tmp_path):
        path = _write_config(tmp_path, "defaults:\n  duration_minutes: -1\n")

        with pytest.raises(ConfigurationError, match="duration_minutes"):
            AppConfig.load_from_yaml(path)

    def test_unknown_timezone_rejected(self, tmp_path):
        path = _write_config(tmp_path, "timezone: Mars/Olympus_Mons\n")

        with pytest.raises(ConfigurationError, match="Unknown timezone"):
            AppConfig.load_from_yaml(path)

    def test_duplicate_colleague_rejected(self):
        with pytest.raises(ValueError, match="Duplicate colleague name"):
            AppConfig(colleagues=[
                Colleague(name="alice", email="a@example.com"),
                Colleague(name="Alice", email="other@example.com"),
            ])


class TestResolveParticipants:
    """Tests for alias/email resolution."""

    @pytest.fixture
    def config(self):
        return AppConfig(colleagues=[
            Colleague(name="alice", email="Alice@Example.com"),
            Colleague(name="bob", email="bob@example.com"),
        ])

    def test_resolve_alias_and_email(self, config):
        assert config.resolve_participant("Alice") == "alice@example.com"
        assert config.resolve_participant("Carol@Example.com") == "carol@example.com"

    def test_resolve_unknown_alias(self, config):
        with pytest.raises(ValueError, match="Unknown participant identifier"):
            config.resolve_participant("mallory")

    def test_resolve_participants_deduplicates(self, config):
        resolved = config.resolve_participants(["alice", "alice@example.com", "bob"])

        assert resolved == ["alice@example.com", "bob@example.com"]

    def test_resolve_participants_reports_all_unknown(self, config):
        with pytest.raises(ValueError, match="mallory, trent"):
            config.resolve_participants(["trent", "alice", "mallory"])

    def test_resolve_no_participants(self, config):
        assert config.resolve_participants([]) == []


class TestDefaultConfigPath:
    """Tests for locating the default config file."""

    def test_prefers_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("{}\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert get_default_config_path() == tmp_path / "config.yaml"

    def test_falls_back_to_user_config(self, tmp_path, monkeypatch):
        """Without a local file the per-user path is used, never the install dir."""
        monkeypatch.chdir(tmp_path)

        path = get_default_config_path()

        assert path == USER_CONFIG_PATH
        assert path.parent == Path.home()
