"""Configuration loading for minibuild (.minibuild.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".minibuild.yml"

BUILD_TYPES = ("wx", "ali", "bu", "tt", "quick", "h5")

DEFAULT_HELPER_PATTERN = r"commonjsHelpers|rollupPluginBabelHelpers\.js"
DEFAULT_WATCH_IGNORED = r"(\.DS_Store|\.gitignore|\.git|\.json$)"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ValidationConfig:
    """Thresholds for the project-structure and code-quality rules."""

    max_lines: int = 500
    runtime_prefix: str = "React"


@dataclass
class WatchConfig:
    """Filesystem watch settings."""

    ignored: str = DEFAULT_WATCH_IGNORED
    settle_seconds: float = 0.7


@dataclass
class BuildConfig:
    """Represents the settings defined in .minibuild.yml."""

    root: Path
    source_dir: str = "source"
    build_dir: str = "dist"
    build_type: str = "wx"
    entry: str = "app.js"
    transformer: str = "copy"
    aliases: Dict[str, str] = field(default_factory=dict)
    helper_pattern: str = DEFAULT_HELPER_PATTERN
    patch_entries: List[str] = field(default_factory=list)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)

    def __post_init__(self) -> None:
        if not self.aliases:
            self.aliases = default_aliases(self.source_dir)

    @property
    def source_path(self) -> Path:
        return self.root / self.source_dir

    @property
    def build_path(self) -> Path:
        # Quick apps are compiled by their own toolkit out of `src`.
        if self.build_type == "quick":
            return self.root / "src"
        return self.root / self.build_dir

    @property
    def entry_path(self) -> Path:
        return self.source_path / self.entry

    @property
    def redirect_styles(self) -> bool:
        """Style edits rebuild the owning script only for quick apps."""
        return self.build_type == "quick"

    @property
    def inline_styles(self) -> bool:
        """Quick apps emit each script's first style alongside the script."""
        return self.build_type == "quick"


def default_aliases(source_dir: str) -> Dict[str, str]:
    return {
        "@components": f"{source_dir}/components",
        "@pages": f"{source_dir}/pages",
        "@assets": f"{source_dir}/assets",
    }


def load_config(config_path: Path) -> BuildConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BuildConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    source_dir = _as_str(data.get("source_dir")) or "source"
    build_type = (_as_str(data.get("build_type")) or "wx").lower()
    if build_type not in BUILD_TYPES:
        raise ConfigError(
            f"Unknown build_type '{build_type}'; expected one of {', '.join(BUILD_TYPES)}"
        )

    aliases = default_aliases(source_dir)
    for key, value in _as_dict(data.get("aliases")).items():
        target = _as_str(value)
        if target:
            aliases[str(key)] = target

    validation = ValidationConfig()
    validation_data = _as_dict(data.get("validation"))
    if validation_data:
        max_lines = _as_int(validation_data.get("max_lines"))
        if max_lines is not None:
            validation.max_lines = max_lines
        prefix = _as_str(validation_data.get("runtime_prefix"))
        if prefix:
            validation.runtime_prefix = prefix

    watch = WatchConfig()
    watch_data = _as_dict(data.get("watch"))
    if watch_data:
        ignored = _as_str(watch_data.get("ignored"))
        if ignored:
            watch.ignored = ignored
        settle = _as_float(watch_data.get("settle_seconds"))
        if settle is not None:
            watch.settle_seconds = settle

    return BuildConfig(
        root=root,
        source_dir=source_dir,
        build_dir=_as_str(data.get("build_dir")) or "dist",
        build_type=build_type,
        entry=_as_str(data.get("entry")) or "app.js",
        transformer=_as_str(data.get("transformer")) or "copy",
        aliases=aliases,
        helper_pattern=_as_str(data.get("helper_pattern")) or DEFAULT_HELPER_PATTERN,
        patch_entries=_as_str_list(data.get("patch_entries")),
        validation=validation,
        watch=watch,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
