"""Load SeamConfig from seam.yaml / seam.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

from seam._errors import ConfigError
from seam.config import SeamConfig

CONFIG_FILENAMES = ("seam.yaml", "seam.yml", "seam.toml")

# Every SeamConfig field except root may come from a config file.
_FILE_KEYS = frozenset(
    f.name for f in dataclasses.fields(SeamConfig) if f.name != "root"
)


def load_config(root: Path, **overrides: object) -> SeamConfig:
    """Load SeamConfig from root, optionally merging seam.yaml / seam.toml.

    Looks for seam.yaml, seam.yml, or seam.toml in root. If found, loads
    and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If the config file cannot be parsed or names an
            unknown setting.

    """
    file_config = _read_seam_config(root)
    merged = {**file_config, **overrides}
    try:
        return SeamConfig(root=root, **merged)
    except TypeError as exc:
        msg = f"Invalid seam configuration: {exc}"
        raise ConfigError(msg) from exc


def find_config_file(root: Path) -> Path | None:
    """Return the config file seam would read from *root*, if any."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def _read_seam_config(root: Path) -> dict[str, object]:
    """Read seam config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        data = _parse_toml(path)
    else:
        data = _parse_yaml(path)
    return _flatten_seam_section(data, path)


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config."""
    import tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc


def _flatten_seam_section(data: dict[str, object], path: Path) -> dict[str, object]:
    """Extract seam.* keys into top-level config."""
    result: dict[str, object] = {}
    seam = data.get("seam")
    if isinstance(seam, dict):
        result.update(seam)
    for k, v in data.items():
        if k != "seam":
            result[k] = v

    unknown = sorted(set(result) - _FILE_KEYS)
    if unknown:
        msg = f"Unknown setting(s) in {path.name}: {', '.join(unknown)}"
        raise ConfigError(msg)
    return result
