"""Configuration loading and management for Qube.

A :class:`Config` is an immutable value object: one per run, shared read-only
by every scanner. Configuration sources are merged in priority order:
    1. Defaults (defined in Config)
    2. Global config (~/.qube.toml)
    3. Project config (./qube.toml)
    4. Explicit config file
    5. Environment variables (QUBE_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(max_line_length=100)
    >>> config.max_line_length
    100
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError
from .logging_config import get_logger
from .models import CheckId

logger = get_logger(__name__)


@dataclass(frozen=True)
class Config:
    """Thresholds, check toggles and pattern lists for one analysis run.

    Values are applied as given. Paired limits are expected to satisfy
    soft <= hard, but nothing enforces it: a negative or inverted threshold
    simply makes the matching check always or never fire.

    Attributes:
        Check toggles:
            check_<id>: one boolean per CheckId (dashes become underscores)

        Paired limits (soft / hard):
            file_line_soft, file_line_hard: file length in lines
            function_line_limit, function_line_critical: function length
            cyclomatic_warning, cyclomatic_critical: cyclomatic complexity

        Single limits:
            max_parameters, max_nesting, max_line_length
            god_class_functions, god_class_signals

        Pattern lists:
            excluded_paths: path substrings skipped by analyze_sources
            todo_patterns: markers for todo-comment, checked in order
            print_patterns / print_whitelist: print-statement detection
            allowed_numbers: literals exempt from magic-number
            commented_code_patterns: prefixes that look like disabled code

        Heuristics:
            count_match_arms: add one complexity point per extra match arm
    """

    # === Check toggles ===
    check_file_length: bool = True
    check_long_function: bool = True
    check_high_complexity: bool = True
    check_too_many_params: bool = True
    check_deep_nesting: bool = True
    check_empty_function: bool = True
    check_missing_return_type: bool = True
    check_god_class: bool = True
    check_long_line: bool = True
    check_todo_comment: bool = True
    check_print_statement: bool = True
    check_magic_number: bool = True
    check_commented_code: bool = True
    check_missing_type_hint: bool = True
    check_naming_convention: bool = True

    # === Paired limits ===
    file_line_soft: int = 200
    file_line_hard: int = 300
    function_line_limit: int = 30
    function_line_critical: int = 60
    cyclomatic_warning: int = 10
    cyclomatic_critical: int = 15

    # === Single limits ===
    max_parameters: int = 4
    max_nesting: int = 3
    max_line_length: int = 120
    god_class_functions: int = 20
    god_class_signals: int = 10

    # === Pattern lists ===
    excluded_paths: tuple[str, ...] = ("addons/", ".godot/", ".import/")
    todo_patterns: tuple[str, ...] = ("TODO", "FIXME", "HACK", "XXX", "BUG", "TEMP")
    print_patterns: tuple[str, ...] = (
        "print(",
        "print_debug(",
        "print_rich(",
        "prints(",
        "printt(",
        "printraw(",
    )
    print_whitelist: tuple[str, ...] = ("Log.", "Logger.", "DebugLogger")
    allowed_numbers: tuple[float, ...] = (0, 1, -1, 2, 0.5, 10, 100)
    commented_code_patterns: tuple[str, ...] = (
        "#var ",
        "#func ",
        "#const ",
        "#signal ",
        "#if ",
        "#elif ",
        "#for ",
        "#while ",
        "#match ",
        "#return",
        "#await ",
        "#print(",
        "#self.",
    )

    # === Heuristics ===
    count_match_arms: bool = False

    @classmethod
    def default(cls) -> "Config":
        """Configuration with the built-in defaults."""
        return cls()

    def is_enabled(self, check_id: CheckId) -> bool:
        return bool(getattr(self, check_id.toggle, True))

    def is_excluded(self, path: str) -> bool:
        """True when any excluded substring occurs anywhere in *path*."""
        return any(fragment in path for fragment in self.excluded_paths)

    def threshold_warnings(self) -> list[str]:
        """Describe paired limits whose soft value exceeds the hard value."""
        pairs = [
            ("file_line_soft", "file_line_hard"),
            ("function_line_limit", "function_line_critical"),
            ("cyclomatic_warning", "cyclomatic_critical"),
        ]
        warnings = []
        for soft, hard in pairs:
            if getattr(self, soft) > getattr(self, hard):
                warnings.append(
                    f"{soft} ({getattr(self, soft)}) is greater than "
                    f"{hard} ({getattr(self, hard)})"
                )
        return warnings


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> Config:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (field name -> value)

    Returns:
        Config instance

    Raises:
        ConfigFileError: If a config file is invalid or missing
        InvalidConfigError: If a key is unknown or a value has the wrong type

    Example:
        >>> config = load_config(config_file=Path("qube.toml"))
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".qube.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "qube.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update(overrides)

    known = {f.name for f in fields(Config)}
    type_hints = get_type_hints(Config)
    values: dict[str, Any] = {}
    for key, value in merged.items():
        if key not in known:
            raise InvalidConfigError(key, value, "unknown setting")
        values[key] = _coerce(key, value, type_hints[key])

    config = Config(**values)
    for warning in config.threshold_warnings():
        logger.warning(f"Inconsistent thresholds: {warning}")
    return config


def _coerce(key: str, value: Any, type_hint: Any) -> Any:
    """Normalise a loaded value to the field's declared type."""
    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if not isinstance(value, (list, tuple)):
            raise InvalidConfigError(key, value, "expected a list")
        item_type = type_hint.__args__[0]
        if item_type is float:
            try:
                return tuple(float(v) for v in value)
            except (TypeError, ValueError):
                raise InvalidConfigError(key, value, "expected a list of numbers")
        return tuple(str(v) for v in value)

    if type_hint is bool:
        if isinstance(value, bool):
            return value
        raise InvalidConfigError(key, value, "expected true/false")

    if type_hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfigError(key, value, "expected an integer")
        return value

    return value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from QUBE_* environment variables.

    Booleans accept true/false/1/0/yes/no/on/off, integers are parsed with
    int(), list settings take a comma-separated string.

    Returns:
        Dict of field_name -> parsed_value for any QUBE_* vars found.
    """
    type_hints = get_type_hints(Config)
    result: dict[str, Any] = {}

    for f in fields(Config):
        env_key = f"QUBE_{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[f.name] = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # Tuple fields: left as a string, split by _coerce
    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file; settings may sit at top level or under [qube]."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))

    section = data.get("qube")
    if isinstance(section, dict):
        return dict(section)
    return data
