"""Typed configuration loading for relkit.toml.

The file is optional. Every field has a default matching the Raven.js
checkout layout, so a bare project with a package.json works unchanged.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_list, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "CommandsConfig",
    "Config",
    "ConfigError",
    "FilesConfig",
    "MarkerConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relkit.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FilesConfig:
    """JSON files carrying the version, relative to the project root."""

    manifest: str = "package.json"
    secondary_manifest: str = "bower.json"
    docs_config: str = "docs/sentry-doc-config.json"
    docs_version_key: str = "RAVEN_VERSION"


@dataclass(frozen=True, slots=True)
class MarkerConfig:
    """An inline version literal inside a text file.

    ``prefix`` is a regular expression fragment matched right before the
    ``x.y.z`` digits; one more arbitrary character (the closing quote) is
    expected right after them.
    """

    path: str
    prefix: str


DEFAULT_MARKERS: tuple[MarkerConfig, ...] = (
    MarkerConfig(path="src/raven.js", prefix="VERSION: ."),
    MarkerConfig(path="test/raven.test.js", prefix="sentry_client: .raven-js/"),
)


@dataclass(frozen=True, slots=True)
class CommandsConfig:
    """Command templates per workflow step.

    Each template is split with shlex; ``{version}`` is substituted in
    every token.
    """

    build: tuple[str, ...] = ("grunt dist",)
    commit: tuple[str, ...] = ("git add -A", "git commit -am {version}")
    tag: tuple[str, ...] = ('git tag -a {version} -m "Version {version}"',)
    push: tuple[str, ...] = ("git push --follow-tags",)
    publish_cdn: tuple[str, ...] = ("grunt publish",)
    publish_registry: tuple[str, ...] = ("npm publish",)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    project_name: str = "Raven.js"
    dry_run: bool = True
    files: FilesConfig = field(default_factory=FilesConfig)
    markers: tuple[MarkerConfig, ...] = DEFAULT_MARKERS
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: If a present entry has the wrong shape.
        """
        files: StrDict = get_table(data, "files") or {}
        commands: StrDict = get_table(data, "commands") or {}

        default_files = FilesConfig()
        dry_run = get_bool(data, "dry_run")
        if "dry_run" in data and dry_run is None:
            raise ValueError("dry_run must be a boolean")

        return cls(
            project_name=get_str(data, "project_name") or "Raven.js",
            dry_run=True if dry_run is None else dry_run,
            files=FilesConfig(
                manifest=get_str(files, "manifest") or default_files.manifest,
                secondary_manifest=get_str(files, "secondary_manifest")
                or default_files.secondary_manifest,
                docs_config=get_str(files, "docs_config") or default_files.docs_config,
                docs_version_key=get_str(files, "docs_version_key")
                or default_files.docs_version_key,
            ),
            markers=_parse_markers(data),
            commands=_parse_commands(commands),
        )


def _parse_markers(data: Mapping[str, object]) -> tuple[MarkerConfig, ...]:
    if "markers" not in data:
        return DEFAULT_MARKERS

    items = get_list(data, "markers")
    if items is None:
        raise ValueError("markers must be an array of tables")

    markers: list[MarkerConfig] = []
    for i, item in enumerate(items):
        table = as_str_dict(item)
        if table is None:
            raise ValueError(f"markers[{i}] must be a table")
        path = get_str(table, "path")
        # Not stripped: trailing spaces can be part of the pattern.
        prefix = table.get("prefix")
        if path is None or not isinstance(prefix, str) or not prefix:
            raise ValueError(f"markers[{i}] needs 'path' and 'prefix'")
        try:
            re.compile(prefix)
        except re.error as e:
            raise ValueError(f"markers[{i}].prefix is not a valid pattern: {e}") from e
        markers.append(MarkerConfig(path=path, prefix=prefix))
    return tuple(markers)


def _parse_commands(commands: Mapping[str, object]) -> CommandsConfig:
    defaults = CommandsConfig()
    values: dict[str, tuple[str, ...]] = {}
    for name in (
        "build",
        "commit",
        "tag",
        "push",
        "publish_cdn",
        "publish_registry",
    ):
        if name not in commands:
            values[name] = getattr(defaults, name)
            continue
        templates = get_str_list(commands, name)
        if not templates:
            raise ValueError(f"commands.{name} must be a non-empty list of strings")
        for template in templates:
            try:
                shlex.split(template)
            except ValueError as e:
                raise ValueError(f"commands.{name}: cannot parse {template!r}: {e}") from e
        values[name] = tuple(templates)
    return CommandsConfig(**values)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relkit.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, defaults otherwise.

    A present but invalid file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
