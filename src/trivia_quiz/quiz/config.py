"""Configuration loader for quiz sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from trivia_quiz.core import config as core_config
from trivia_quiz.core import workspace as workspace_mod

from .state import DEFAULT_DURATION_SECONDS

CONFIG_FILENAME = "trivia.toml"
CONFIG_ENV = "TRIVIA_QUIZ_CONFIG"
ENV_PREFIX = "TRIVIA_QUIZ_"

_DEFAULT_LOG_LEVEL = "INFO"


class QuizConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


class InterfaceMode(Enum):
    CONSOLE = "console"
    TUI = "tui"

    @classmethod
    def from_value(cls, value: str) -> "InterfaceMode":
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise QuizConfigError(
            f"Unknown interface mode '{value}'. Expected one of: {expected}."
        )


@dataclass(frozen=True)
class QuizConfig:
    duration_seconds: int
    shuffle_seed: Optional[int]
    dataset_path: Optional[Path]
    interface: InterfaceMode
    log_level: str
    verbose: bool


@dataclass(frozen=True)
class ConfigOverrides:
    """Values taken from the command line; ``None`` means not given."""

    duration_seconds: Optional[int] = None
    shuffle_seed: Optional[int] = None
    dataset_path: Optional[Path] = None
    interface: Optional[InterfaceMode] = None
    log_level: Optional[str] = None
    verbose: Optional[bool] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Resolve quiz settings with precedence CLI > env > TOML > defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise QuizConfigError(str(exc)) from exc

    requested = _resolve_config_path(
        config_path, env_map, layout.path_for("config") / CONFIG_FILENAME
    )
    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        try:
            core_config.merge_defaults(table, core_config.load_toml(requested))
        except core_config.TomlConfigError as exc:
            raise QuizConfigError(str(exc)) from exc
        loaded_path = requested
    elif config_path is not None or _env_string(env_map, "CONFIG"):
        raise QuizConfigError(f"Config file not found: {requested}")

    duration = _pick_first(
        overrides.duration_seconds,
        _env_int(env_map, "DURATION_SECONDS"),
        table["session"]["duration_seconds"],
    )
    seed = _pick_first(
        overrides.shuffle_seed,
        _env_int(env_map, "SHUFFLE_SEED"),
        table["session"]["shuffle_seed"],
    )
    dataset = _pick_first(
        overrides.dataset_path,
        _env_string(env_map, "DATASET"),
    )
    dataset_base = None
    if dataset is None:
        dataset = table["dataset"]["path"]
        dataset_base = loaded_path.parent if loaded_path else None
    interface = _pick_first(
        overrides.interface,
        _env_string(env_map, "INTERFACE"),
        table["interface"]["mode"],
    )
    log_level = _pick_first(
        overrides.log_level,
        _env_string(env_map, "LOG_LEVEL"),
        table["logging"]["level"],
    )
    verbose = _pick_first(overrides.verbose, table["logging"]["verbose"])

    config = QuizConfig(
        duration_seconds=_positive_int(duration, "session.duration_seconds"),
        shuffle_seed=_optional_int(seed, "session.shuffle_seed"),
        dataset_path=_dataset_path(dataset, dataset_base),
        interface=_interface(interface),
        log_level=_log_level(log_level),
        verbose=_bool(verbose, "logging.verbose"),
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def default_config_text() -> str:
    """Return the commented ``trivia.toml`` shipped with the package."""

    return (
        resources.files("trivia_quiz.quiz")
        .joinpath(CONFIG_FILENAME)
        .read_text(encoding="utf-8")
    )


def write_default_config(path: Path, *, overwrite: bool = False) -> Path:
    """Write the default quiz config to ``path``."""

    try:
        return core_config.write_toml_template(
            path, template=default_config_text(), overwrite=overwrite
        )
    except core_config.TomlConfigError as exc:
        raise QuizConfigError(str(exc)) from exc


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "session": {
            "duration_seconds": DEFAULT_DURATION_SECONDS,
            "shuffle_seed": None,
        },
        "dataset": {"path": None},
        "interface": {"mode": InterfaceMode.CONSOLE.value},
        "logging": {"level": _DEFAULT_LOG_LEVEL, "verbose": False},
    }


def _resolve_config_path(
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _env_int(env_map: Mapping[str, str], key: str) -> Optional[int]:
    raw = _env_string(env_map, key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise QuizConfigError(
            f"{ENV_PREFIX}{key} must be an integer, got '{raw}'."
        ) from exc


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _positive_int(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise QuizConfigError(f"'{field}' must be a positive integer.")
    return value


def _optional_int(value: object, field: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise QuizConfigError(f"'{field}' must be an integer.")
    return value


def _dataset_path(value: object, base: Optional[Path]) -> Optional[Path]:
    """Normalize the dataset path; TOML values resolve against ``base``."""

    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        value = Path(value)
    if not isinstance(value, Path):
        raise QuizConfigError("'dataset.path' must be a string.")
    path = value.expanduser()
    if not path.is_absolute() and base is not None:
        path = base / path
    return path


def _interface(value: object) -> InterfaceMode:
    if isinstance(value, InterfaceMode):
        return value
    if isinstance(value, str):
        return InterfaceMode.from_value(value)
    raise QuizConfigError("'interface.mode' must be one of: console, tui.")


def _log_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise QuizConfigError("'logging.level' must be a non-empty string.")
    return value.strip().upper()


def _bool(value: object, field: str) -> bool:
    if not isinstance(value, bool):
        raise QuizConfigError(f"'{field}' must be true or false.")
    return value
