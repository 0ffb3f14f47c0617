from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from wordweave.core.errors import ConfigError
from wordweave.core.merge.line_set import DEDUP_MODES


DEFAULT_CONFIG: dict[str, Any] = {
    "output": "merged.txt",
    "dedup": "hash",
    "progress_every": 10_000,
    # Above this many simultaneously open inputs, warn about fd limits.
    "fd_warning_threshold": 100,
    "buffer_size": 128 * 1024,
}


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load overrides from a YAML file.

    Format:
      output: merged.txt
      dedup: hash | exact
      progress_every: 10000
      fd_warning_threshold: 100
      buffer_size: 131072

    Every key is optional. Returns only the keys present in the file.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"config file could not be read: {e}") from e
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"config file is not valid YAML: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("config file must be a mapping of option -> value")

    out: dict[str, Any] = {}
    for k, v in raw.items():
        if k not in DEFAULT_CONFIG:
            raise ConfigError(
                f"unknown config key: {k} (choose from: {', '.join(sorted(DEFAULT_CONFIG))})"
            )
        if k == "output":
            if not isinstance(v, str) or not v.strip():
                raise ConfigError("output must be a non-empty string")
            out[k] = v.strip()
        elif k == "dedup":
            if v not in DEDUP_MODES:
                raise ConfigError(f"dedup must be one of: {', '.join(DEDUP_MODES)}")
            out[k] = v
        else:
            # bool is an int subclass; reject it explicitly.
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise ConfigError(f"{k} must be a positive integer")
            out[k] = v
    return out


def merged_config(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    merged = dict(DEFAULT_CONFIG)
    if overrides:
        merged.update(overrides)
    return merged


def load_and_merge(config_file: str | None) -> dict[str, Any]:
    if not config_file:
        return merged_config()
    return merged_config(load_config_file(config_file))
