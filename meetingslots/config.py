"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pendulum
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .domain.exceptions import ConfigurationError


class DefaultsConfig(BaseModel):
    """Default settings for search."""
    duration_minutes: int = 30

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is not negative."""
        if value < 0:
            raise ValueError("duration_minutes must not be negative")
        return value


class Colleague(BaseModel):
    """Colleague/Participant configuration."""
    name: str  # Used as alias
    email: str


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    timezone: str = "Europe/Berlin"
    calendar_file: Optional[Path] = None
    colleagues: List[Colleague] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA identifier."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("colleagues")
    @classmethod
    def validate_colleagues(cls, value: List[Colleague]) -> List[Colleague]:
        """Ensure colleague aliases and emails are unique."""
        seen_names: set[str] = set()
        seen_emails: set[str] = set()
        for colleague in value:
            name_key = colleague.name.lower()
            email_key = colleague.email.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate colleague name detected: {colleague.name}")
            if email_key in seen_emails:
                raise ValueError(f"Duplicate colleague email detected: {colleague.email}")
            seen_names.add(name_key)
            seen_emails.add(email_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``calendar_file`` is resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            config = cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

        if config.calendar_file is not None and not config.calendar_file.is_absolute():
            config.calendar_file = config_path.parent / config.calendar_file

        return config

    def alias_map(self) -> Dict[str, str]:
        """Map lower-cased aliases to lower-cased email addresses."""
        return {c.name.lower(): c.email.lower() for c in self.colleagues}

    def resolve_participant(self, identifier: str) -> str:
        """
        Turn an alias or an email address into an email address.

        Raises:
            ValueError: If the identifier is neither an email nor a known alias
        """
        key = identifier.strip().lower()
        if "@" in key:
            return key

        try:
            return self.alias_map()[key]
        except KeyError:
            raise ValueError(
                f"Unknown participant identifier: '{identifier}'. "
                f"Use an email address or a configured name."
            ) from None

    def resolve_participants(self, identifiers: Sequence[str]) -> List[str]:
        """
        Resolve several identifiers, keeping first-seen order without repeats.

        An empty sequence resolves to an empty list; whether that is allowed
        is up to the caller. All unknown identifiers are reported at once.
        """
        aliases = self.alias_map()
        resolved: Dict[str, None] = {}
        unknown = set()

        for identifier in identifiers:
            key = identifier.strip().lower()
            if "@" in key:
                resolved.setdefault(key)
            elif key in aliases:
                resolved.setdefault(aliases[key])
            else:
                unknown.add(identifier)

        if unknown:
            raise ValueError(
                f"Unknown participant identifier(s): {', '.join(sorted(unknown))}. "
                "Ensure they exist in the configuration or provide valid email addresses."
            )

        return list(resolved)


USER_CONFIG_PATH = Path.home() / ".meetingslots.yaml"


def get_default_config_path() -> Path:
    """
    Return ``./config.yaml`` if present, otherwise the per-user config file.
    """
    local_path = Path.cwd() / "config.yaml"
    if local_path.exists():
        return local_path
    return USER_CONFIG_PATH
