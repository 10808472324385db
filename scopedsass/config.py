"""Configuration loading for scopedsass (.scopedsass.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .compiler.base import OUTPUT_STYLES, CompileOptions

CONFIG_FILENAME = ".scopedsass.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompilerConfig:
    """Compiler settings from .scopedsass.yml."""

    output_style: str = "expanded"
    include_paths: List[str] = field(default_factory=list)
    precision: Optional[int] = None
    source_map: bool = False
    indented: Optional[bool] = None
    additional_data: Optional[str] = None

    def to_options(self, source_path: str | None = None) -> CompileOptions:
        return CompileOptions(
            output_style=self.output_style,
            include_paths=tuple(self.include_paths),
            precision=self.precision,
            source_map=self.source_map,
            indented=self.indented,
            additional_data=self.additional_data,
            source_path=source_path,
        )


@dataclass
class MergeConfig:
    """Merge behaviour toggles."""

    verify_structure: bool = True


@dataclass
class ScopedSassConfig:
    """Represents the settings defined in .scopedsass.yml.

    ``scopes`` keeps the raw entries (mappings with ``scope_name`` and
    ``path``) so that validation, not parsing, decides which ones survive.
    """

    root: Path
    scopes: Optional[List[Dict[str, Any]]] = None
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    merge: MergeConfig = field(default_factory=MergeConfig)
    max_workers: Optional[int] = None


def load_config(config_path: Path) -> ScopedSassConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ScopedSassConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    raw_scopes = data.get("scopes", data.get("multipleScopeVars"))
    scopes = None
    if raw_scopes is not None:
        if not isinstance(raw_scopes, list):
            raise ConfigError("'scopes' must be a list of {scope_name, path} entries")
        scopes = [_resolve_scope(entry, root) for entry in raw_scopes]

    compiler_data = _as_dict(data.get("compiler"))
    compiler = CompilerConfig()
    if compiler_data:
        style = _as_str(compiler_data.get("output_style"))
        if style is not None:
            if style not in OUTPUT_STYLES:
                raise ConfigError(f"Unknown compiler.output_style '{style}'")
            compiler.output_style = style
        compiler.include_paths = [
            str(_resolve_path(item, root)) for item in _as_str_list(compiler_data.get("include_paths"))
        ]
        compiler.precision = _as_int(compiler_data.get("precision"))
        compiler.source_map = _as_bool(compiler_data.get("source_map")) or False
        compiler.indented = _as_bool(compiler_data.get("indented"))
        compiler.additional_data = _as_str(compiler_data.get("additional_data"))

    merge_data = _as_dict(data.get("merge"))
    merge = MergeConfig()
    verify = _as_bool(merge_data.get("verify_structure"))
    if verify is not None:
        merge.verify_structure = verify

    max_workers = _as_int(data.get("max_workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("max_workers must be a positive integer")

    return ScopedSassConfig(
        root=root,
        scopes=scopes,
        compiler=compiler,
        merge=merge,
        max_workers=max_workers,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
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


def _resolve_scope(entry: Any, root: Path) -> Dict[str, Any]:
    # Entries that are not mappings are passed through so validation reports them.
    if not isinstance(entry, dict):
        return {"scope_name": None, "path": None}
    name = entry.get("scope_name", entry.get("scopeName"))
    path = entry.get("path")
    if isinstance(path, str) and path:
        path = str(_resolve_path(path, root))
    elif isinstance(path, list):
        path = [str(_resolve_path(item, root)) if isinstance(item, str) and item else item for item in path]
    return {"scope_name": name, "path": path}


def _resolve_path(value: str, root: Path) -> Path:
    candidate = Path(value).expanduser()
    return candidate if candidate.is_absolute() else root / candidate


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CompilerConfig",
    "ConfigError",
    "MergeConfig",
    "ScopedSassConfig",
    "load_config",
]
