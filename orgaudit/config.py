"""Analysis policy configuration and loading."""

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from orgaudit.errors import ConfigError
from orgaudit.utils.io import load_toml_config

type ConfigDict = dict[str, float | int]

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class AnalysisConfig:
    # Manager should earn at least 20% and no more than 50% above the
    # average of their direct reports.
    min_factor: float = 1.20
    max_factor: float = 1.50
    # Max managers between an employee and the CEO
    max_depth: int = 4

    def __post_init__(self) -> None:
        # bool subclasses int and is rejected
        for name in ("min_factor", "max_factor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError(f"max_depth must be an integer, got {self.max_depth!r}")

        if self.min_factor <= 0 or self.max_factor <= 0:
            raise ConfigError(
                f"Salary factors must be positive, got {self.min_factor} and {self.max_factor}"
            )
        if self.min_factor > self.max_factor:
            raise ConfigError(
                f"min_factor ({self.min_factor}) must not exceed max_factor ({self.max_factor})"
            )
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must be non-negative, got {self.max_depth}")

    @classmethod
    def from_dict(cls, data: ConfigDict) -> "AnalysisConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


def _read_toml(path: Path) -> ConfigDict:
    try:
        data = load_toml_config(path)
    except ValueError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    # Accept either a dedicated file or a pyproject-style [tool.orgaudit] table
    match data:
        case {"tool": {"orgaudit": dict() as section}}:
            return section
        case {"tool": {"orgaudit": other}}:
            raise ConfigError(
                f"Expected [tool.orgaudit] in {path} to be a table, got {type(other).__name__}"
            )
        case {"tool": dict()}:
            return {}
        case _ if path.name == "pyproject.toml":
            return {}
        case _:
            return data


def _read_yaml(path: Path) -> ConfigDict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("orgaudit", data)
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_analysis_config(path: str | Path | None = None) -> AnalysisConfig:
    """Load policy settings.

    With an explicit path the file type decides the parser. Without one,
    ``orgaudit.yaml`` next to the project is tried first, then the
    ``[tool.orgaudit]`` table of ``pyproject.toml``, then the defaults.
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        match path.suffix.lower():
            case ".toml":
                return AnalysisConfig.from_dict(_read_toml(path))
            case ".yaml" | ".yml":
                return AnalysisConfig.from_dict(_read_yaml(path))
            case ext:
                raise ConfigError(f"Unsupported config format: {ext or path.name}")

    yaml_path = PROJECT_ROOT / "orgaudit.yaml"
    if yaml_path.exists():
        return AnalysisConfig.from_dict(_read_yaml(yaml_path))

    pyproject = PROJECT_ROOT / "pyproject.toml"
    if pyproject.exists():
        return AnalysisConfig.from_dict(_read_toml(pyproject))

    return AnalysisConfig()
