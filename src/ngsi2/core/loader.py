# ngsi2/core/loader.py
"""
Dynamic import and YAML configuration helpers.
"""
from __future__ import annotations

import importlib
import logging
import os
import re
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def import_attr(path: str) -> Any:
    """Import ``attr`` from ``module.path:attr``.

    Raises:
        ValueError: If ``path`` has no ``:`` separator.
        ImportError: If the module cannot be imported.
        AttributeError: If the module lacks the attribute.
    """
    if ":" not in path:
        raise ValueError(f"Invalid import path '{path}', expected 'module:attr'")

    mod_name, attr = path.split(":", 1)
    try:
        mod = importlib.import_module(mod_name)
    except ImportError as exc:
        logger.error("Failed to import module '%s'", mod_name)
        raise ImportError(f"Cannot import module '{mod_name}'") from exc

    try:
        return getattr(mod, attr)
    except AttributeError as exc:
        logger.error("Module '%s' has no attribute '%s'", mod_name, attr)
        raise AttributeError(f"Module '{mod_name}' has no attribute '{attr}'") from exc


def substitute_env_vars(value: Any) -> Any:
    """Recursively expand ``${VAR}`` / ``${VAR:-default}`` in config values.

    Raises:
        ValueError: If a variable is unset and has no default.
    """
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_env_replacement, value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def _env_replacement(match: re.Match) -> str:
    name, default = match.group(1), match.group(2)
    env_value = os.environ.get(name)
    if env_value is not None:
        return env_value
    if default is not None:
        return default
    raise ValueError(f"Environment variable '{name}' is not set and no default provided")


def load_yaml_files(patterns: Iterable[str]) -> list[dict[str, Any]]:
    """Load every YAML file matching the glob patterns, in sorted path order.

    Raises:
        ValueError: If a file holds anything but a mapping at top level.
    """
    patterns = list(patterns)
    files = sorted({Path(m).resolve() for p in patterns for m in glob(p)})

    if not files:
        logger.warning("No config files found matching patterns: %s", patterns)
        return []

    logger.info("Loading config files: %s", [str(f) for f in files])

    out: list[dict[str, Any]] = []
    for f in files:
        with f.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file '{f}' must hold a mapping at top level")
        out.append(data)
    return out
