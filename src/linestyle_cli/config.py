import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from linestyle.errors import ConfigurationError
from linestyle.registry import ConfiguredRule, RuleRegistry

from .models import ConfigFile

DEFAULT_CONFIG_FILE = Path(".linestyle.toml")

# Searched in order when no --config is given
CONFIG_FILE_NAMES = (DEFAULT_CONFIG_FILE.name, "pyproject.toml")

# Used when no configuration file exists
DEFAULT_RULES: dict[str, dict[str, Any]] = {
    "no-tabs": {},
    "no-multiple-empty-lines": {"max": 2},
}


def find_config_file(directory: Path) -> Path | None:
    """Return the first configuration file present in `directory`, if any"""
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


class LintConfig:
    """Handles loading and validation of .linestyle.toml configuration

    An explicit `config_path` must exist. Without one, `.linestyle.toml` and
    then `pyproject.toml` are looked up in the current directory, and the
    built-in defaults apply when neither is found.
    """

    def __init__(self, config_path: Path | None = None):
        self.rules: dict[str, dict[str, Any]] = {name: dict(opts) for name, opts in DEFAULT_RULES.items()}
        self.max_passes = 10

        if config_path is None:
            config_path = find_config_file(Path.cwd())
            if config_path is None:
                return
        elif not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")

        self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Cannot parse {path}: {e}") from e

        table = data.get("tool", {}).get("linestyle")
        if table is None:
            if path.name == "pyproject.toml":
                return
            raise ConfigurationError(f"{path} has no [tool.linestyle] table")

        try:
            parsed = ConfigFile.model_validate(table)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}:\n{e}") from e

        self.rules = parsed.rules
        self.max_passes = parsed.max_passes

    def apply_to_registry(self, registry: RuleRegistry) -> list[ConfiguredRule]:
        """Return the enabled, validated rules for this config"""
        return registry.configure_all(self.rules)
