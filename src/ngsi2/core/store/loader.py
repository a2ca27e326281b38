# ngsi2/core/store/loader.py
"""
Context store loader - reads config/store.yaml and builds the store.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from ngsi2.core.loader import import_attr, load_yaml_files, substitute_env_vars
from ngsi2.core.store.base import ContextStore

logger = logging.getLogger(__name__)


def load_context_store(patterns: Iterable[str]) -> ContextStore:
    """Instantiate the context store declared in YAML.

    Expected YAML::

        store:
          class: my_backend.store:OrionContextStore
          config:
            base_url: "${ORION_URL:-http://localhost:1026}"
            timeout: 10

    When several files declare a store, the last one (in sorted path order)
    wins. Without any declaration the base ``ContextStore`` is returned and
    every operation answers ``501 Not Implemented``.
    """
    declared: dict[str, Any] | None = None
    for data in load_yaml_files(patterns):
        if data.get("store"):
            declared = data["store"]

    if declared is None:
        logger.warning("No context store configured, every operation is unsupported")
        return ContextStore()

    class_path = declared.get("class")
    if not class_path:
        raise ValueError("Context store declaration requires a 'class' import path")

    cls = import_attr(class_path)
    kwargs = substitute_env_vars(declared.get("config") or {})
    store = cls(**kwargs)
    if not isinstance(store, ContextStore):
        raise TypeError(f"'{class_path}' does not build a ContextStore")

    logger.info("Context store: %s", class_path)
    return store
