"""User configuration stored in ~/.saga/config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

SAGA_HOME_ENV_VAR = "SAGA_HOME"
_TRUTHY_VALUES = {"1", "true", "yes", "on"}

ConfigValue = str | bool


class ConfigError(RuntimeError):
    """Raised when configuration is invalid or an unknown key is used."""


@dataclass(frozen=True, slots=True)
class ConfigOption:
    key: str
    description: str
    default: ConfigValue = ""

    def coerce(self, value: ConfigValue | None) -> ConfigValue:
        if value is None:
            return self.default
        if isinstance(self.default, bool):
            if isinstance(value, bool):
                return value
            return str(value).strip().lower() in _TRUTHY_VALUES
        return str(value)


CONFIG_OPTIONS: tuple[ConfigOption, ...] = (
    ConfigOption("jira_hostname", "The hostname of your Jira instance."),
    ConfigOption("email", "The email address associated with your Atlassian account."),
    ConfigOption("project", "The default project to pick issues from."),
    ConfigOption(
        "ask_for_starting_point",
        "Whether to ask for a starting point instead of branching off the base branch.",
        True,
    ),
    ConfigOption("working_status", "Status to transition to when starting work on an issue."),
    ConfigOption(
        "ready_for_review_status",
        "Status to transition to when marking an issue as ready for review.",
    ),
    ConfigOption("branch_name_pattern", "Regular expression branch names must match."),
    ConfigOption("pr_title_pattern", "Regular expression pull request titles must match."),
    ConfigOption(
        "empty_commit_message",
        "Message of the empty commit created when a new branch has no commits.",
        "chore: creating pull request",
    ),
)

_OPTIONS_BY_KEY = {option.key: option for option in CONFIG_OPTIONS}


def get_saga_home() -> Path:
    """Return the directory holding saga's config and crash log.

    Resolution order:
    1. SAGA_HOME environment variable
    2. %LOCALAPPDATA%\\saga\\ on Windows (via platformdirs)
    3. ~/.saga/ elsewhere
    """
    if env_home := os.environ.get(SAGA_HOME_ENV_VAR):
        return Path(env_home)

    if os.name == "nt":
        from platformdirs import user_data_dir

        return Path(user_data_dir("saga"))

    return Path.home() / ".saga"


def default_config_path() -> Path:
    return get_saga_home() / "config.yaml"


def get_option(key: str) -> ConfigOption:
    try:
        return _OPTIONS_BY_KEY[key]
    except KeyError:
        raise ConfigError(f"Could not find key '{key}'") from None


class SagaConfig:
    """Schema-backed key/value settings persisted as YAML.

    The file is created with defaults on first use. Keys outside the schema
    are rejected; unknown keys already in the file are left untouched.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_config_path()
        self._values: dict[str, ConfigValue] = {}
        self._load()

    def get(self, key: str) -> ConfigValue:
        option = get_option(key)
        return self._values.get(key, option.default)

    def set(self, key: str, value: ConfigValue | None) -> ConfigValue:
        option = get_option(key)
        self._values[key] = option.coerce(value)
        self._save()
        return self._values[key]

    def clear(self) -> None:
        self._values = {option.key: option.default for option in CONFIG_OPTIONS}
        self._save()

    def items(self) -> Iterator[tuple[str, ConfigValue]]:
        for option in CONFIG_OPTIONS:
            yield option.key, self.get(option.key)

    def _read_payload(self) -> dict:
        yaml = YAML()
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle) or {}
        except YAMLError as exc:
            raise ConfigError(f"Failed to parse {self.path}: {exc}") from exc
        return payload if isinstance(payload, dict) else {}

    def _load(self) -> None:
        if not self.path.exists():
            self.clear()
            return

        payload = self._read_payload()
        self._values = {option.key: option.coerce(payload.get(option.key)) for option in CONFIG_OPTIONS}

    def _save(self) -> None:
        """Persist known keys, preserving anything else in the file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        payload = self._read_payload() if self.path.exists() else {}
        for key, value in self._values.items():
            payload[key] = value

        yaml = YAML()
        yaml.preserve_quotes = True
        with self.path.open("w", encoding="utf-8") as handle:
            yaml.dump(payload, handle)
