"""Application settings and loading them from a JSON file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_MISSING = object()


@dataclass(frozen=True)
class PathsConfig:
    """File-system locations used by the application."""

    data_dir: str = "data"
    results_dir: str = "results"
    output_filename: str = "result.png"


@dataclass(frozen=True)
class AlgorithmConfig:
    """Parameters of the contrast algorithm.

    ``window_size`` is the side, in pixels, of the square sliding window used
    for spatial averaging. A size of 1 means no spatial averaging at all.
    """

    window_size: int = 1


@dataclass(frozen=True)
class Config:
    """Root configuration holding every section."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    algorithm: AlgorithmConfig = field(default_factory=AlgorithmConfig)


def _lookup(obj: dict[str, Any], key: str) -> Any:
    """Return the value for ``key``, matching names case-insensitively.

    When several keys match, the last one in the document wins.
    """
    found = _MISSING
    folded = key.casefold()
    for name, value in obj.items():
        if name == key or name.casefold() == folded:
            found = value
    return found


def _string(obj: dict[str, Any], key: str, default: str, section: str) -> str:
    value = _lookup(obj, key)
    if value is _MISSING or value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(
            f"cannot use {type(value).__name__} value for field {section}.{key} of type string"
        )
    return value


def _integer(obj: dict[str, Any], key: str, default: int, section: str) -> int:
    value = _lookup(obj, key)
    if value is _MISSING or value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(
            f"cannot use {type(value).__name__} value {value!r} for field {section}.{key} of type int"
        )
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value {value} for field {section}.{key} overflows int")
    return value


def _section(obj: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = _lookup(obj, key)
    if value is _MISSING or value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(
            f"cannot use {type(value).__name__} value for section {key!r}, expected an object"
        )
    return value


def _decode(raw: Any) -> Config:
    defaults = Config()
    if raw is None:
        return defaults
    if not isinstance(raw, dict):
        raise ValueError(
            f"cannot use {type(raw).__name__} value as configuration, expected an object"
        )

    paths = defaults.paths
    paths_raw = _section(raw, "paths")
    if paths_raw is not None:
        paths = PathsConfig(
            data_dir=_string(paths_raw, "data_dir", paths.data_dir, "paths"),
            results_dir=_string(paths_raw, "results_dir", paths.results_dir, "paths"),
            output_filename=_string(
                paths_raw, "output_filename", paths.output_filename, "paths"
            ),
        )

    algorithm = defaults.algorithm
    algorithm_raw = _section(raw, "algorithm")
    if algorithm_raw is not None:
        algorithm = AlgorithmConfig(
            window_size=_integer(
                algorithm_raw, "window_size", algorithm.window_size, "algorithm"
            ),
        )

    return Config(paths=paths, algorithm=algorithm)


def load_config(
    path: str | os.PathLike[str], logger: logging.Logger | None = None
) -> Config:
    """Load settings from the JSON file at ``path``.

    A missing file is not an error: a warning is logged and the defaults are
    returned. Values present in the file override the defaults; absent ones
    keep them. Other file-system errors propagate, and malformed content
    raises ``ValueError``.
    """
    log = logger if logger is not None else logging.getLogger(__name__)
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except FileNotFoundError:
        log.warning("config file '%s' not found, using default settings.", os.fspath(path))
        return Config()

    try:
        raw = json.loads(data)
    except UnicodeDecodeError as exc:
        raise ValueError(f"invalid configuration encoding: {exc}") from exc
    return _decode(raw)